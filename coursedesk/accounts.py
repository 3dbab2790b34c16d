import logging
import time

from .errors import ErrorCode, Result

log = logging.getLogger(__name__)


class AccountService:
    def __init__(self, store, delay_seconds=0.5, sleep=time.sleep):
        self.store = store
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    def login(self, username, password) -> Result:
        # fixed latency, same as a round trip to an auth backend
        if self.delay_seconds:
            self.sleep(self.delay_seconds)
        user = self.store.find_user_by_username((username or "").strip())
        if user is None or not user.check_password(password or ""):
            log.info("failed login for %r", username)
            return Result.failure(ErrorCode.INVALID_CREDENTIALS)
        return Result.success(user, f"Welcome, {user.role}!")
