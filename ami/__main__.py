"""
So that `python -m ami` works the same as the `ami` console script.
"""
from .cmdline import main

main()
