from steady.polling import PollConfig, PollTimeoutError, eventually, poll, wait_until

__version__ = "0.1.0"

__all__ = [
    "PollConfig",
    "PollTimeoutError",
    "eventually",
    "poll",
    "wait_until",
]
