# SPDX-License-Identifier: MIT

from chronoplan.cleanup import register_cleanup
from chronoplan.initialize import initialize
from chronoplan.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
