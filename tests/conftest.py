import pytest


class FakeScheduler:
    """Stands in for Tk.after / Tk.after_cancel."""

    def __init__(self):
        self.pending = {}
        self.cancelled = []
        self._next_token = 0

    def after(self, delay_ms, callback):
        self._next_token += 1
        token = f"after#{self._next_token}"
        self.pending[token] = (delay_ms, callback)
        return token

    def after_cancel(self, token):
        self.cancelled.append(token)
        self.pending.pop(token, None)

    def run_pending(self):
        pending = list(self.pending.items())
        self.pending.clear()
        for _token, (_delay, callback) in pending:
            callback()


@pytest.fixture
def scheduler():
    return FakeScheduler()
