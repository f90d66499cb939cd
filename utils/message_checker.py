"""
Sent Message Verification
Collaborator called with the send history after every successful cycle
"""
from typing import Dict, List
from flask import current_app


class MessageChecker:
    """Interface for checking that sent messages were delivered"""

    def check(self, history: List[Dict]):
        raise NotImplementedError


class NoopMessageChecker(MessageChecker):
    """Placeholder checker, accepts the history without validating it"""

    def check(self, history: List[Dict]):
        current_app.logger.info(f"Check messages {len(history)}")
        return None
