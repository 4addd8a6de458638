"""Package entry point for ``python -m shorts_subtitler``.

WHY: Users run the subtitle step as ``python -m shorts_subtitler --script
details.json --transcript transcript.json``, or start the HTTP API with
``python -m shorts_subtitler --serve``.

HOW: Checks sys.argv for the ``--serve`` flag. If present, runs the FastAPI
app with uvicorn. Otherwise, delegates to the CLI's main() function.
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from shorts_subtitler.server.app import run_api
        run_api()
    else:
        from shorts_subtitler.cli import main
        main()
