import logging

from seriesalign.io.readers import iter_ndjson, parse_ndjson
from seriesalign.transforms.chart import transform_records


def test_parse_ndjson_skips_blank_and_malformed_lines(caplog):
    text = '{"t": 1, "v": 2}\n\n{not json}\n[1, 2]\n  {"t": 2, "v": 3}  \n'

    with caplog.at_level(logging.WARNING, logger="seriesalign.io.readers"):
        records = parse_ndjson(text)

    assert records == [{"t": 1, "v": 2}, {"t": 2, "v": 3}]
    assert "malformed NDJSON line 3" in caplog.text
    assert "line 4: expected an object, got list" in caplog.text


def test_parse_ndjson_non_string_input():
    assert parse_ndjson(None) == []
    assert parse_ndjson(b'{"t": 1}') == []
    assert parse_ndjson("") == []


def test_iter_ndjson_reads_file_into_transform(tmp_path):
    path = tmp_path / "result.ndjson"
    path.write_text(
        '{"value": 1, "__timestamp": 1704067200000000000}\n'
        '{"value": 3, "__timestamp": 1704067260000000000}\n',
        encoding="utf-8",
    )

    records = list(iter_ndjson(path))
    out = transform_records(records)

    assert out.data[0] == [1_704_067_200_000, 1_704_067_260_000]
    assert out.data[1] == [1.0, 3.0]
