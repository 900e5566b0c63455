"""Entry point: tui | oneshot."""

import sys


def main():
    mode = "tui"
    if len(sys.argv) > 1 and not sys.argv[1].startswith("--"):
        mode = sys.argv[1].lower()

    if mode == "tui":
        from ballista.interfaces.tui import run_tui

        sys.exit(run_tui(stay_open="--stay" in sys.argv))

    elif mode == "oneshot":
        from ballista.interfaces.oneshot import run_oneshot

        launch = "--launch" in sys.argv[2:]
        query_parts = [arg for arg in sys.argv[2:] if arg != "--launch"]
        if query_parts:
            query = " ".join(query_parts).strip()
        else:
            query = sys.stdin.read().strip()
        sys.exit(run_oneshot(query=query, launch=launch))

    else:
        print(f"Unknown mode: {mode}")
        print("Usage: python -m ballista.main [tui [--stay]|oneshot QUERY [--launch]]")
        sys.exit(2)


if __name__ == "__main__":
    main()
