import argparse
import collections.abc
from typing import Dict, Iterable, List, Optional

import pandas as pd

from pyprops.propfile.parser import ParseError, parse_properties, parse_propfile
from pyprops.property import Property
from pyprops.util import DELIMITERS, ExportOptions


def parse(input_object: bytes) -> List[Property]:
    """
    Parses a properties buffer and returns a list of properties. There may be
    properties with duplicate keys in the returned list.

    Use `to_map` to convert the list into a dict with unique keys.

        >>> props = parse(b'key1=value1\\nkey2=value2\\n')
        >>> to_map(props)['key2']
        'value2'
    """
    if isinstance(input_object, str):
        raise ValueError('parse: input should be bytes, encode text as latin-1 first')
    return parse_properties(input_object)


def parse_file(filepath, verbose: bool = False) -> List[Property]:
    return parse_propfile(filepath, verbose=verbose)


def to_map(props: Iterable[Property]) -> Dict[str, str]:
    """Converts properties into a dict, the last occurrence of a key wins."""
    mapping = {}
    for prop in props:
        mapping[prop.key] = prop.value
    return mapping


def to_dataframe(props: Iterable[Property], export_options: ExportOptions = None) -> pd.DataFrame:
    if export_options is None:
        export_options = ExportOptions()

    if not isinstance(props, collections.abc.Iterable):
        raise ValueError('to_dataframe: props should be a collection of properties')

    if export_options.unique:
        rows = list(to_map(props).items())
    else:
        rows = [prop.astuple() for prop in props]

    props_df = pd.DataFrame(rows, columns=['key', 'value'])

    if export_options.sort_keys:
        # Stable sort, repeated keys keep their file order.
        props_df = props_df.sort_values('key', kind='mergesort').reset_index(drop=True)

    return props_df


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description='pyprops')
    parser.add_argument('inputs', metavar='input', type=str, nargs='+',
                        help='a filepath to a .properties file')
    parser.add_argument('--output', metavar='output', type=str,
                        help='an output path', required=True)
    parser.add_argument('--file-delimiter', default='comma', const='comma', nargs='?',
                        choices=['comma', 'pipe', 'tab'],
                        help='delimiter character for the output file (default: %(default)s)')
    parser.add_argument('--unique', action='store_true',
                        help='keep only the last value of every key in each file')
    parser.add_argument('--sort-keys', action='store_true')
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args(argv)

    export_options = ExportOptions(
        unique=args.unique,
        sort_keys=args.sort_keys,
    )

    delimiter = DELIMITERS[args.file_delimiter]

    with open(args.output, 'w+') as f:
        pass

    property_count = 0
    header = True

    for input_file in args.inputs:
        try:
            props = parse_file(input_file, verbose=args.verbose)
        except ParseError as e:
            exit('%s: %s\n%s' % (input_file, e, e.context))

        props_df = to_dataframe(props, export_options=export_options)
        props_df['source'] = input_file
        property_count += len(props_df)
        props_df.to_csv(args.output, mode='a', sep=delimiter, header=header, index=False)

        if header:
            header = False

    if args.verbose:
        print('Number of properties: %d' % property_count)


if __name__ == '__main__':
    main()

__all__ = ['parse', 'parse_file', 'to_map', 'to_dataframe', 'main']
