import pytest

from huma.api import (
    API,
    Config,
    Format,
    ProtoVersion,
    UnknownContentTypeError,
    json_format,
)


def _api(**formats):
    return API(Config(formats={"application/json": json_format(), **formats}))


def test_blank_config():
    api = API(Config())
    assert api.format_keys == []
    assert list(api.middlewares()) == []


def test_no_config():
    api = API()
    with pytest.raises(UnknownContentTypeError):
        api.marshal("application/json", {})


def test_default_format_is_json_when_registered():
    api = _api()
    assert api.config.default_format == "application/json"
    assert api.format_keys[0] == "application/json"


def test_explicit_default_format_first():
    cbor = Format(marshal=lambda v: b"x", unmarshal=lambda d: None)
    api = API(
        Config(
            formats={"application/json": json_format(), "application/cbor": cbor},
            default_format="application/cbor",
        )
    )
    assert api.format_keys[0] == "application/cbor"
    assert set(api.format_keys) == {"application/json", "application/cbor"}


def test_unmarshal_with_charset():
    api = _api()
    assert api.unmarshal("application/json; charset=utf-8", b'{"a": 1}') == {"a": 1}


def test_unmarshal_empty_content_type_defaults_to_json():
    api = _api()
    assert api.unmarshal("", b"[1, 2]") == [1, 2]


def test_unmarshal_suffix():
    api = _api(json=json_format())
    assert api.unmarshal("application/merge-patch+json", b'{"b": true}') == {"b": True}


def test_unmarshal_unknown():
    api = _api()
    with pytest.raises(UnknownContentTypeError) as info:
        api.unmarshal("text/plain", b"hi")
    assert info.value.content_type == "text/plain"
    assert str(info.value) == "unknown content type: text/plain"


def test_marshal_round_trip():
    api = _api()
    value = {"name": "thing", "items": [1, 2, 3]}
    data = api.marshal("application/json", value)
    assert api.unmarshal("application/json", data) == value


def test_marshal_suffix_fallback():
    api = _api(json=json_format())
    data = api.marshal("application/vnd.custom+json", {"x": 1})
    assert api.unmarshal("application/json", data) == {"x": 1}


def test_marshal_unknown():
    api = _api()
    with pytest.raises(UnknownContentTypeError):
        api.marshal("application/yaml", {})


def test_transform_order():
    calls = []

    def first(ctx, status, v):
        calls.append(("first", status))
        return v + [1]

    def second(ctx, status, v):
        calls.append(("second", status))
        return v + [2]

    api = API(Config(transformers=[first, second]))
    assert api.transform(None, "200", []) == [1, 2]
    assert calls == [("first", "200"), ("second", "200")]


def test_transform_error_propagates():
    def fail(ctx, status, v):
        raise RuntimeError("boom")

    api = API(Config(transformers=[fail]))
    with pytest.raises(RuntimeError, match="boom"):
        api.transform(None, "200", {})


def test_middlewares_run_in_order():
    order = []

    def mw(tag):
        def run(ctx, following):
            order.append(tag)
            following(ctx)

        return run

    api = API()
    api.use_middleware(mw("a"))
    api.use_middleware(mw("b"), mw("c"))
    api.middlewares().handler(lambda ctx: order.append(ctx))("end")
    assert order == ["a", "b", "c", "end"]


def test_create_hooks_applied():
    def hook(config):
        config.formats = {"application/json": json_format()}
        return config

    api = API(Config(create_hooks=[hook]))
    assert api.config.default_format == "application/json"
    assert api.unmarshal("application/json", b"3") == 3


def test_config_not_mutated():
    config = Config(formats={"application/json": json_format()})
    API(config)
    assert config.default_format == ""


def test_proto_version_fields():
    version = ProtoVersion("HTTP/1.1", 1, 1)
    assert (version.proto, version.proto_major, version.proto_minor) == ("HTTP/1.1", 1, 1)