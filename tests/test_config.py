import pytest
from eth_account import Account

from denscope import (
    ApiKeyAuth,
    AuthMode,
    ClientConfig,
    ConfigError,
    LocalAccountSigner,
    X402Auth,
    create_client,
    load_client_config,
)
from denscope.core.environment import build_environment, read_env_file


@pytest.fixture
def private_key():
    return Account.create().key.hex()


def test_defaults():
    config = ClientConfig()

    assert config.base_url == "https://denscope.vercel.app"
    assert config.auth is None
    assert config.mode is None
    assert config.signature_validity_seconds == 3600
    assert config.timeout_seconds == 30


def test_base_url_trailing_slash_is_stripped():
    assert ClientConfig(base_url="https://example.com/").base_url == "https://example.com"


def test_config_is_immutable():
    config = ClientConfig()
    with pytest.raises(AttributeError):
        config.base_url = "https://other.example.com"


def test_api_key_mode():
    config = load_client_config(env_file=None, base={"DENSCOPE_API_KEY": "ds_abc"})

    assert isinstance(config.auth, ApiKeyAuth)
    assert config.mode is AuthMode.API_KEY
    assert config.auth.api_key == "ds_abc"


def test_private_key_mode(private_key):
    config = load_client_config(env_file=None, base={"DENSCOPE_PRIVATE_KEY": private_key})

    assert isinstance(config.auth, X402Auth)
    assert config.mode is AuthMode.X402
    assert isinstance(config.auth.signer, LocalAccountSigner)
    key = private_key if private_key.startswith("0x") else "0x" + private_key
    assert config.auth.address == Account.from_key(key).address


def test_modes_are_mutually_exclusive(private_key):
    with pytest.raises(ConfigError):
        load_client_config(
            env_file=None,
            base={"DENSCOPE_API_KEY": "ds_abc", "DENSCOPE_PRIVATE_KEY": private_key},
        )


@pytest.mark.parametrize("bad_key", ["0x1234", "zz" * 32])
def test_invalid_private_key(bad_key):
    with pytest.raises(ConfigError):
        load_client_config(env_file=None, base={"DENSCOPE_PRIVATE_KEY": bad_key})


@pytest.mark.parametrize("value", ["0", "-5", "soon"])
def test_invalid_validity_window(value):
    with pytest.raises(ConfigError):
        load_client_config(
            env_file=None, base={"DENSCOPE_SIGNATURE_VALIDITY_SECONDS": value}
        )


def test_api_key_must_not_be_empty():
    with pytest.raises(ConfigError):
        ApiKeyAuth("  ")


class BadAddressSigner:
    address = "not-an-address"

    def sign_typed_data(self, typed_data):
        return "0x"


def test_with_signer_rejects_bad_address():
    with pytest.raises(ConfigError):
        ClientConfig.with_signer(BadAddressSigner())


def test_x402_auth_rejects_bad_address():
    with pytest.raises(ConfigError, match="signer address"):
        X402Auth(BadAddressSigner())


def test_config_with_directly_built_auth_rejects_bad_address():
    with pytest.raises(ConfigError):
        ClientConfig(auth=X402Auth(BadAddressSigner()))


def test_env_file_layering(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "DENSCOPE_BASE_URL=https://file.example.com\n"
        "export DENSCOPE_TIMEOUT_SECONDS='12'\n"
        'DENSCOPE_API_KEY="ds_from_file"\n'
    )

    config = load_client_config(
        env_file=str(env_file),
        base={"DENSCOPE_BASE_URL": "https://env.example.com"},
        overrides={"DENSCOPE_API_KEY": "ds_override"},
    )

    assert config.base_url == "https://env.example.com"
    assert config.timeout_seconds == 12
    assert config.auth.api_key == "ds_override"


def test_keyword_arguments_win(tmp_path):
    config = load_client_config(
        env_file=str(tmp_path / "missing.env"),
        base={"DENSCOPE_API_KEY": "ds_env"},
        api_key="ds_kwarg",
        signature_validity_seconds=90,
    )

    assert config.auth.api_key == "ds_kwarg"
    assert config.signature_validity_seconds == 90


def test_build_environment_skips_env_file():
    variables = build_environment(env_file=None, base={"A": "1"}, overrides={"B": "2"})
    assert variables == {"A": "1", "B": "2"}


def test_build_environment_env_file_fills_missing_keys(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("A=from_file\nB=from_file\nC=from_file\n")

    variables = build_environment(
        env_file=str(env_file), base={"A": "existing"}, overrides={"C": "override"}
    )

    assert variables == {"A": "existing", "B": "from_file", "C": "override"}


def test_read_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "\n"
        "PLAIN=value\n"
        "export EXPORTED = spaced\n"
        "QUOTED=\"a=b\"\n"
        "SINGLE='x'\n"
        "no assignment\n"
        "=orphan\n"
    )

    assert read_env_file(str(env_file)) == {
        "PLAIN": "value",
        "EXPORTED": "spaced",
        "QUOTED": "a=b",
        "SINGLE": "x",
    }


def test_read_env_file_missing(tmp_path):
    assert read_env_file(str(tmp_path / "absent.env")) == {}


def test_create_client_rejects_mixed_arguments():
    with pytest.raises(ValueError):
        create_client(config=ClientConfig(), api_key="ds_abc")


def test_create_client_with_signer():
    signer = LocalAccountSigner(Account.create())

    client = create_client(signer=signer, env_file=None, base={}, timeout_seconds=5)

    assert client.config.auth.signer is signer
    assert client.config.timeout_seconds == 5
