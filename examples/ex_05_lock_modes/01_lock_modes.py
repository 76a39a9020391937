"""Lock modes: share one container between threads.

``LockMode.THREAD`` serializes container operations, so concurrent
``resolve`` calls build a memoized value exactly once. The default
``LockMode.NONE`` skips locking for single-threaded code.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from entrywire import Container, LockMode


class Config:
    builds = 0

    def __init__(self) -> None:
        Config.builds += 1


def main() -> None:
    container = Container(lock_mode=LockMode.THREAD)
    container.register("config", Config)

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: container.resolve("config"), range(8)))

    print(f"same_instance={all(result is results[0] for result in results)}")  # => same_instance=True
    print(f"builds={Config.builds}")  # => builds=1


if __name__ == "__main__":
    main()
