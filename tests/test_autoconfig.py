import json

from huma.autoconfig import AutoConfig, AutoConfigVar


def test_empty_var_omits_everything():
    assert AutoConfigVar().to_dict() == {}


def test_var_keeps_set_fields():
    var = AutoConfigVar(description="Region", example="us", default="eu", enum=["eu", "us"], exclude=True)
    assert var.to_dict() == {
        "description": "Region",
        "example": "us",
        "default": "eu",
        "enum": ["eu", "us"],
        "exclude": True,
    }


def test_var_keeps_falsy_non_null_default():
    assert AutoConfigVar(default=0).to_dict() == {"default": 0}


def test_empty_config_keeps_required_keys():
    assert AutoConfig().to_dict() == {"security": "", "params": None}


def test_config_nests_prompt_vars():
    config = AutoConfig(
        security="oauth",
        headers={"X-Env": "{env}"},
        prompt={"env": AutoConfigVar(description="Environment")},
        params={"client_id": "{env}"},
    )
    data = config.to_dict()
    assert data["prompt"] == {"env": {"description": "Environment"}}
    assert data["headers"] == {"X-Env": "{env}"}
    assert data["params"] == {"client_id": "{env}"}
    assert list(data) == ["security", "headers", "prompt", "params"]


def test_config_round_trips_through_json():
    config = AutoConfig(security="oauth", params={"a": "b"})
    assert json.loads(json.dumps(config.to_dict())) == config.to_dict()


def test_to_dict_copies_params():
    config = AutoConfig(params={"a": "b"})
    data = config.to_dict()
    data["params"]["a"] = "changed"
    assert config.params == {"a": "b"}