import sys

from user_manager.main import main


if __name__ == "__main__":
    sys.exit(main())
