import pytest
from statuslist.codec import GZIP_MTIME, b64url_decode, decode_status_list, encode_status_list
from statuslist.config import DEFAULT_CONFIG, CodecConfig, load_config
from statuslist.errors import PaddingError, StatusListError

LIST_2BIT = [1, 2, 0, 3, 0, 1, 0, 1, 1, 2, 3, 3]
ENCODED_2BIT = "H4sIAMo_jGQC_zvp8hMAZLRLMQMAAAA"


def test_defaults():
    assert DEFAULT_CONFIG.mtime == GZIP_MTIME == 1686912970
    assert DEFAULT_CONFIG.compresslevel == 9
    assert not DEFAULT_CONFIG.strict
    assert encode_status_list(LIST_2BIT, 2, DEFAULT_CONFIG) == ENCODED_2BIT


def test_mtime_override():
    config = CodecConfig(mtime=0)
    encoded = encode_status_list(LIST_2BIT, 2, config)
    assert encoded != ENCODED_2BIT
    assert b64url_decode(encoded)[4:8] == b"\x00\x00\x00\x00"
    # still decodes the same
    assert decode_status_list(encoded, 2) == LIST_2BIT


def test_compresslevel_override():
    encoded = encode_status_list(LIST_2BIT, 2, CodecConfig(compresslevel=1))
    # XFL byte marks the fastest level
    assert b64url_decode(encoded)[8] == 4
    assert decode_status_list(encoded, 2) == LIST_2BIT


def test_strict_decoding():
    strict = CodecConfig(strict=True)
    assert decode_status_list(ENCODED_2BIT, 2, count=12, config=strict) == LIST_2BIT
    encoded = encode_status_list([1, 1, 1], 1)
    assert decode_status_list(encoded, 1, count=3, config=strict) == [1, 1, 1]
    with pytest.raises(PaddingError):
        decode_status_list(ENCODED_2BIT, 2, count=8, config=strict)
    with pytest.raises(ValueError):
        decode_status_list(ENCODED_2BIT, 2, config=strict)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mtime": -1},
        {"mtime": 2**32},
        {"mtime": "now"},
        {"compresslevel": 10},
        {"compresslevel": -1},
        {"strict": "yes"},
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(StatusListError):
        CodecConfig(**kwargs)


def test_load_config(tmp_path):
    path = tmp_path / "statuslist.yaml"
    path.write_text("mtime: 0\nstrict: true\n")
    config = load_config(path)
    assert config == CodecConfig(mtime=0, compresslevel=9, strict=True)


def test_load_empty_config(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == DEFAULT_CONFIG


def test_load_bad_config(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("mtime: 0\nlevel: 9\n")
    with pytest.raises(StatusListError):
        load_config(path)

    path.write_text("- 1\n- 2\n")
    with pytest.raises(StatusListError):
        load_config(path)
