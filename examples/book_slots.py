import time

import classavail


def main() -> None:
    # Attaches to a server already on :3000, otherwise starts one.
    client = classavail.run(port=3000)

    alice = client.create("Alice", "MATH101", ["08:00-09:00", "09:00-10:00"])
    print("created", alice)

    try:
        client.create("Bob", "MATH101", ["09:00-10:00"])
    except classavail.ConflictError as ex:
        print("rejected:", ex.message)

    client.update(alice.id, "Alice", "MATH101", ["10:00-11:00"])
    client.create("Bob", "MATH101", ["09:00-10:00"])

    occ = client.occupancy("MATH101")
    for slot in classavail.TIME_SLOTS:
        print(f"{slot}  {occ.occupied.get(slot, '-')}")

    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
