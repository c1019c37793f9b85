import httpx

BASE_URL = "https://www.googleapis.com/youtube/v3"

class SearchError(Exception):
    pass

class YouTubeClient:
    def __init__(self, api_key: str, timeout: float = 10):
        self._key = api_key
        self._http = httpx.Client(timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self._http.close()

    def search_live(self, channel_id: str):
        # first page only; maxResults is left to the service default
        params = {
            "part": "snippet",
            "channelId": channel_id,
            "eventType": "live",
            "type": "video",
            "key": self._key,
        }
        try:
            r = self._http.get(f"{BASE_URL}/search", params=params)
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SearchError(f"live search failed for {channel_id}: {e}") from e
        if not isinstance(data, dict):
            raise SearchError(f"unexpected search response for {channel_id}: {type(data).__name__}")
        return data
