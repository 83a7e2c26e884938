from replaycoach.api.client import ApiClient

__all__ = ["ApiClient"]
