import pytest

from trollbot.config import DEFAULT_LLM_MODEL, ConfigError, load_config, load_dotenv, resolve_environment

BASE_ENV = {
    "TELEGRAM_BOT_TOKEN": "123:abc",
    "GROQ_API_KEY": "gsk_test",
    "OWNER_USERNAME": "@boss",
    "OWNER_ID": "1001",
}


def test_load_config_defaults():
    config = load_config(BASE_ENV)

    assert config.owner_username == "boss"
    assert config.owner_user_id == 1001
    assert config.bot_name == "trollgod"
    assert config.llm_model == DEFAULT_LLM_MODEL
    assert config.llm_max_tokens == 100
    assert config.llm_timeout_sec == 30.0
    assert config.owner_info == ""


@pytest.mark.parametrize("missing", ["TELEGRAM_BOT_TOKEN", "GROQ_API_KEY", "OWNER_USERNAME", "OWNER_ID"])
def test_missing_required_value_is_fatal(missing):
    env = {k: v for k, v in BASE_ENV.items() if k != missing}
    with pytest.raises(ConfigError):
        load_config(env)


def test_invalid_owner_id_is_fatal():
    with pytest.raises(ConfigError, match="OWNER_ID"):
        load_config({**BASE_ENV, "OWNER_ID": "boss"})


def test_load_dotenv_parses_quotes_and_comments(tmp_path):
    path = tmp_path / ".env"
    path.write_text('# comment\nOWNER_INFO="likes tea"\nBOT_NAME=roastbot\nbroken line\n', encoding="utf-8")

    assert load_dotenv(path) == {"OWNER_INFO": "likes tea", "BOT_NAME": "roastbot"}


def test_resolve_environment_loads_dotenv_without_overriding(tmp_path):
    path = tmp_path / ".env"
    path.write_text("OWNER_ID=1\nOWNER_INFO=from file\n", encoding="utf-8")

    merged = resolve_environment({**BASE_ENV, "LOCAL_ENV": "1"}, path)

    assert merged["OWNER_ID"] == "1001"
    assert merged["OWNER_INFO"] == "from file"


def test_resolve_environment_requires_file_when_local(tmp_path):
    with pytest.raises(ConfigError):
        resolve_environment({"LOCAL_ENV": "1"}, tmp_path / "missing.env")


def test_resolve_environment_skips_file_otherwise(tmp_path):
    assert resolve_environment(BASE_ENV, tmp_path / "missing.env") == BASE_ENV
