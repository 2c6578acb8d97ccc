import pandas as pd
import pytest

from pyprops.propfile.parser import ParseError
from pyprops.properties import main, parse, parse_file, to_dataframe, to_map
from pyprops.property import Property
from pyprops.util import ExportOptions


def test_parse_simple():
    props = parse(b'\nproperty=test\nproperty2=test\n')
    assert props == [Property('property', 'test'), Property('property2', 'test')]

    res = to_map(props)
    assert res == {'property': 'test', 'property2': 'test'}


def test_broken_parse():
    with pytest.raises(ParseError):
        parse(b'=test\n')


def test_parse_rejects_text():
    with pytest.raises(ValueError):
        parse('key=value')


def test_map_conversion():
    res = to_map(parse(b'\nproperty=test\nproperty2=test\nproperty=t\n'))
    assert len(res) == 2
    assert res['property'] == 't'
    assert res['property2'] == 'test'


def test_to_map_empty():
    assert to_map([]) == {}


def test_doc_example():
    properties = parse(b'\nkey1=value1\nkey2=value2\nkey3=value3\n')
    properties = to_map(properties)

    assert properties['key1'] == 'value1'
    assert properties['key2'] == 'value2'
    assert properties['key3'] == 'value3'


def test_property_is_immutable_and_ordered():
    prop = Property('b', '1')
    with pytest.raises(AttributeError):
        prop.key = 'c'
    assert sorted([prop, Property('a', '2')]) == [Property('a', '2'), prop]
    assert prop.astuple() == ('b', '1')
    assert str(prop) == 'b=1'


def test_to_dataframe():
    props = parse(b'b=1\na=2\nb=3\n')

    df = to_dataframe(props)
    assert list(df.columns) == ['key', 'value']
    assert df.values.tolist() == [['b', '1'], ['a', '2'], ['b', '3']]

    df = to_dataframe(props, ExportOptions(unique=True))
    assert df.values.tolist() == [['b', '3'], ['a', '2']]

    df = to_dataframe(props, ExportOptions(sort_keys=True))
    assert df.values.tolist() == [['a', '2'], ['b', '1'], ['b', '3']]

    assert len(to_dataframe([])) == 0


def test_parse_file(tmp_path):
    path = tmp_path / 'db.properties'
    path.write_bytes(b'url = jdbc:h2:mem\nuser:sa\n')
    assert to_map(parse_file(path)) == {'url': 'jdbc:h2:mem', 'user': 'sa'}


def test_parse_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_file(tmp_path / 'missing.properties')


def test_cli(tmp_path, capsys):
    first = tmp_path / 'first.properties'
    first.write_bytes(b'# first\nname=one\nname=uno\n')
    second = tmp_path / 'second.properties'
    second.write_bytes(b'colour : blue\n')
    output = tmp_path / 'out.csv'

    main([str(first), str(second), '--output', str(output), '--unique', '--verbose'])

    df = pd.read_csv(output, dtype=str)
    assert df.values.tolist() == [
        ['name', 'uno', str(first)],
        ['colour', 'blue', str(second)],
    ]
    assert 'Number of properties: 2' in capsys.readouterr().out


def test_cli_delimiter(tmp_path):
    path = tmp_path / 'app.properties'
    path.write_bytes(b'a=1\nb=2\n')
    output = tmp_path / 'out.tsv'

    main([str(path), '--output', str(output), '--file-delimiter', 'tab'])

    df = pd.read_csv(output, sep='\t', dtype=str)
    assert list(df.columns) == ['key', 'value', 'source']
    assert df['key'].tolist() == ['a', 'b']


def test_cli_syntax_error(tmp_path):
    path = tmp_path / 'broken.properties'
    path.write_bytes(b'=test\n')

    with pytest.raises(SystemExit):
        main([str(path), '--output', str(tmp_path / 'out.csv')])
