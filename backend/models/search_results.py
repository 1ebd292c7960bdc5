from typing import TypedDict, List

class SearchDocument(TypedDict, total=False):
    """One ranked document returned by the search provider."""
    url: str
    title: str
    snippet: str

class ToolResultPayload(TypedDict):
    """Payload handed back to the model as the getResult response."""
    query: str
    results: List[SearchDocument]
