from scorecard_parser.config import load_config, read_prompt_file


def test_defaults_without_environment():
    cfg = load_config()
    assert cfg.api_key is None
    assert cfg.base_url is None
    assert cfg.model == "gpt-4.1-mini"
    assert cfg.timeout == 120
    assert cfg.max_tokens == 2500
    assert cfg.image_quality == 90
    assert cfg.image_max_size == 0
    assert cfg.image_debug is False


def test_load_config_reads_dotenv(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("OPENAI_API_KEY=dot-env-key\nOPENAI_MODEL=test-model\nIMAGE_MAX_SIZE=512\n")

    import scorecard_parser.config as cfg_mod

    monkeypatch.setattr(cfg_mod, "_find_env_file", lambda: str(env_file))
    # load_dotenv writes into os.environ; monkeypatch restores them afterwards
    for name in ("OPENAI_API_KEY", "OPENAI_MODEL", "IMAGE_MAX_SIZE"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

    cfg = load_config()
    assert cfg.api_key == "dot-env-key"
    assert cfg.model == "test-model"
    assert cfg.image_max_size == 512


def test_invalid_integer_falls_back_to_default(monkeypatch, capsys):
    monkeypatch.setenv("OPENAI_TIMEOUT", "soon")
    cfg = load_config()
    assert cfg.timeout == 120
    assert "invalid OPENAI_TIMEOUT" in capsys.readouterr().err


def test_debug_flag_from_either_variable(monkeypatch):
    monkeypatch.setenv("IMAGE_DEBUG", "yes")
    assert load_config().image_debug is True
    monkeypatch.setenv("DEBUG", "0")
    assert load_config().image_debug is False


def test_read_prompt_file_missing(tmp_path, capsys):
    res = read_prompt_file(str(tmp_path / "not_exists.txt"))
    assert res == ""
    assert "ERROR: failed to read PROMPT_FILE" in capsys.readouterr().err


def test_read_prompt_file_empty_path():
    assert read_prompt_file(None) == ""
