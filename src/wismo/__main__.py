"""Allow ``python -m wismo``."""

from wismo.server import main

main()
