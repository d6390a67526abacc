# SPDX-License-Identifier: MIT

from projectboard.initialize import initialize
from projectboard.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
