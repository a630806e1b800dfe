"""Package entry point for ``python -m srt_generator``.

Delegates to the CLI's main() function.
"""

from srt_generator.cli import main

if __name__ == "__main__":
    main()
