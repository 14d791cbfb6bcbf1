#!/usr/bin/env python3
'''
Convert an iPhone PNG into a PNG any application can read:

 $ fixpng.py icon.png icon-fixed.png

Set DEBUG in the environment to see every chunk going through; the
PNGFIX_* variables tune the conversion (see pngfix.config).
'''
import sys

from pngfix.cli import main


if __name__ == '__main__':
    sys.exit(main())
