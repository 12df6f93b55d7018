"""Allow running with: python -m renpy_transcoder"""

from .cli import main

main()
