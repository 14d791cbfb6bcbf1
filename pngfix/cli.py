import logging
import os
import sys

from .config import Config
from .convert import convert_file
from .exceptions import InputException, InputFormatException, PNGFixException


logger = logging.getLogger(__name__)


def usage(progname):
    print(f'Usage: {progname} <input> <output>\n')
    sys.exit(1)


def die(why):
    print(why)
    sys.exit(1)


def main(argv=None):
    argv = sys.argv if argv is None else argv

    if len(argv) != 3:
        usage(os.path.basename(argv[0]) if argv else 'fixpng')

    logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

    input_path, output_path = argv[1:]

    try:
        config = Config.from_environ()
    except ValueError as e:
        die(f'invalid configuration: {e}')

    try:
        convert_file(input_path, output_path, config=config)
    except InputFormatException as e:
        die(str(e))
    except InputException as e:
        die(f'Couldn\'t read file \'{input_path}\': {e.__cause__}')
    except PNGFixException as e:
        die(f'{e.__class__.__name__}: {e}')

    return 0
