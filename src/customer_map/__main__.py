from .cli import parse_args
from .build import build_map


def main():
    args = parse_args()
    build_map(args)


if __name__ == "__main__":
    main()
