from cxone_reader.utils.debug_logger import DebugLogger, redact
from tests.conftest import make_access_token, make_api_key


class TestRedact:
    def test_bearer_header(self):
        assert redact("Authorization: Bearer abc123 sent") == "Authorization: Bearer *** sent"

    def test_jwt_shaped_tokens(self):
        token = make_access_token()
        assert redact(f"token={token} done") == "token=*** done"

    def test_two_segment_api_key(self):
        api_key = make_api_key().rsplit(".", 1)[0]
        assert redact(f"key {api_key}") == "key ***"

    def test_literal_secrets(self):
        assert redact("login with hunter2", secrets=["hunter2"]) == "login with ***"

    def test_plain_text_untouched(self):
        assert redact("Found 3 projects (eyJ is a prefix)") == "Found 3 projects (eyJ is a prefix)"


class TestDebugLogger:
    def test_file_never_contains_credentials(self, tmp_path):
        api_key = make_api_key()
        access_token = make_access_token()
        log_path = tmp_path / "debug.txt"

        logger = DebugLogger(str(log_path), secrets=[api_key])
        logger.log(f"Exchanging {api_key}")
        logger.log(f"Authorization: Bearer {access_token}")
        logger.add_secret("opaque-secret")
        logger.log("renewed with opaque-secret")
        logger.close()

        content = log_path.read_text()
        assert api_key not in content
        assert access_token not in content
        assert "opaque-secret" not in content
        assert "Exchanging ***" in content
        assert "Debug log ended" in content

    def test_console_output_is_redacted(self, tmp_path, capsys):
        logger = DebugLogger(str(tmp_path / "debug.txt"), console_debug=True)
        logger.log("Authorization: Bearer abc")
        logger.close()
        assert "Bearer ***" in capsys.readouterr().out

    def test_unwritable_path(self, tmp_path, capsys):
        logger = DebugLogger(str(tmp_path / "missing" / "debug.txt"))
        logger.log("still works")
        assert "Could not open debug log file" in capsys.readouterr().out
