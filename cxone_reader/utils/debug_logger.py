"""Debug log file with credential redaction."""

import re
from datetime import datetime

REDACTED = '***'

_BEARER = re.compile(r'(Bearer\s+)\S+', re.IGNORECASE)
# header.payload[.signature] with a JSON header
_JWT = re.compile(r'eyJ[\w-]*\.[\w-]+(?:\.[\w-]*)?')


def redact(message, secrets=()):
    """Mask bearer values, JWT-shaped tokens and any known secret in a message.

    >>> redact("Authorization: Bearer abc.def")
    'Authorization: Bearer ***'
    """
    text = str(message)
    for secret in secrets:
        text = text.replace(secret, REDACTED)
    text = _BEARER.sub(lambda m: m.group(1) + REDACTED, text)
    return _JWT.sub(REDACTED, text)


class DebugLogger:
    """Timestamped, line-buffered debug log for one CLI run.

    API keys and access tokens never reach the file or the console: every
    line goes through ``redact`` first.
    """

    def __init__(self, log_file_path, console_debug=False, secrets=None):
        """Initialize the debug logger.

        Args:
            log_file_path (str): Path to the debug log file
            console_debug (bool): Whether to also print to console
            secrets (list, optional): Literal values to mask, e.g. the API key
        """
        self.log_file_path = log_file_path
        self.console_debug = console_debug
        self.secrets = [secret for secret in (secrets or []) if secret]
        self.file_handle = None

        try:
            # nosec B113 - controlled path
            self.file_handle = open(log_file_path, 'w', encoding='utf-8', buffering=1)
        except OSError as e:
            print(f"Warning: Could not open debug log file: {e}")
            return
        self.log(f"Debug log started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    def add_secret(self, secret):
        """Mask another literal value from now on."""
        if secret and secret not in self.secrets:
            self.secrets.append(secret)

    def log(self, message):
        """Write a redacted message to the debug log.

        Args:
            message (str): Message to log
        """
        message = redact(message, self.secrets)

        if self.file_handle:
            timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
            try:
                self.file_handle.write(f"[{timestamp}] {message}\n")
            except OSError as e:
                print(f"Warning: Failed to write to debug log: {e}")

        if self.console_debug:
            print(message)

    def close(self):
        if self.file_handle:
            self.log(f"Debug log ended: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
            try:
                self.file_handle.close()
            except OSError:
                pass
            self.file_handle = None

    def __del__(self):
        self.close()
