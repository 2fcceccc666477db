#!/usr/bin/env python3
'''
Dump the content of an HDF5 file as JSON

 $ fromhdf5.py measurements.h5 | jq '.run1.temperature[:3]'

Set DEBUG in the environment to see what's going on, HDF5TREE_MAX_DEPTH to
change the maximum nesting allowed and HDF5TREE_ALLOW_DUPLICATES to keep the
last of duplicated names instead of failing.
'''
import json
import logging
import os
import sys

from hdf5tree.command import from_hdf5, LabeledError
from hdf5tree.options import DecodeOptions


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <hdf5 file>')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    filepath = sys.argv[1]

    with open(filepath, 'rb') as f:
        data = f.read()

    try:
        options = DecodeOptions.from_env()
    except ValueError as e:
        logger.error(e)
        sys.exit(1)

    try:
        value = from_hdf5(data, options=options)
    except LabeledError as e:
        print(f'{e.label}: {e.msg}', file=sys.stderr)
        sys.exit(1)

    print(json.dumps(value, indent=2))
