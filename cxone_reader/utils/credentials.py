"""Headless credential entry."""

import getpass
import sys


class CredentialPrompt:
    """Ask the user for an API key on the terminal."""

    def __init__(self, prompt="CxOne API key: ", input_func=None):
        """Initialize the prompt.

        Args:
            prompt (str): Prompt text
            input_func (callable, optional): Reads one line; defaults to getpass
        """
        self.prompt = prompt
        self.input_func = input_func or getpass.getpass

    def ask(self):
        """Ask for credentials.

        Returns:
            dict: {'api_key': ...}, or None if the user cancelled
        """
        try:
            api_key = self.input_func(self.prompt)
        except (EOFError, KeyboardInterrupt):
            print(file=sys.stderr)
            return None

        api_key = (api_key or '').strip()
        if not api_key:
            return None
        return {'api_key': api_key}
