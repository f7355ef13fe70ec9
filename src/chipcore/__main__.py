import logging
import sys

from chipcore.host import Host

# Set up the logging
logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s]:  %(message)s", stream=sys.stdout)
# Per-opcode debug messages are only wanted while debugging
logging.getLogger("chipcore").setLevel(logging.DEBUG if "pydevd" in sys.modules else logging.INFO)


def main() -> None:
    host = Host()
    host.event_loop()


if __name__ == "__main__":
    main()
