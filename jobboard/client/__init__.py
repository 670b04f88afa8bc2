from jobboard.client.api_client import JobBoardClient, QueryCache

__all__ = ["JobBoardClient", "QueryCache"]
