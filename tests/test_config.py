from argparse import Namespace

from cxone_reader.utils.config import Config
from cxone_reader.utils.credentials import CredentialPrompt


class TestConfig:
    def test_from_env(self, tmp_path, monkeypatch):
        for name in ("CXONE_API_KEY", "CXONE_DEBUG", "CXONE_OUTPUT_DIR", "CXONE_OUTPUT_FORMAT"):
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        env_file = tmp_path / ".env"
        env_file.write_text("CXONE_API_KEY=key\nCXONE_DEBUG=true\nCXONE_OUTPUT_FORMAT=XLSX\n")

        config = Config.from_env(str(env_file))

        assert config.api_key == "key"
        assert config.debug is True
        assert config.output_format == "xlsx"
        assert config.page_size_results == 20

    def test_args_override(self):
        config = Config()
        Config.from_args(Namespace(api_key="k2", debug=True, output_dir="out", format="csv"), config)
        assert config.api_key == "k2"
        assert config.output_directory == "out"

    def test_validate(self, tmp_path):
        config = Config()
        assert config.validate() == (True, None)
        config.output_format = "pdf"
        assert config.validate()[0] is False
        config.output_format = "csv"
        config.branch_mapping_file = str(tmp_path / "missing.csv")
        assert config.validate()[0] is False


class TestCredentialPrompt:
    def test_returns_key(self):
        assert CredentialPrompt(input_func=lambda prompt: " abc ").ask() == {"api_key": "abc"}

    def test_empty_input_cancels(self):
        assert CredentialPrompt(input_func=lambda prompt: "").ask() is None

    def test_eof_cancels(self):
        def raise_eof(prompt):
            raise EOFError

        assert CredentialPrompt(input_func=raise_eof).ask() is None
