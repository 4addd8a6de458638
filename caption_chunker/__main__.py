"""Package entry point for ``python -m caption_chunker``."""

from .cli import main

if __name__ == "__main__":
    main()
