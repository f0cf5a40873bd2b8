from snippet_catalog.entities import NewSnippet, Snippet


def make_new_snippet(**overrides) -> NewSnippet:
    data = {
        "store_name": "acme.myshopify.com",
        "theme_name": "Dawn",
        "date": "2024-05-01",
        "author": "Ana Silva",
        "code": "<script>drawer.open()</script>",
    }
    data.update(overrides)
    return NewSnippet(**data)


def make_snippet(snippet_id: str, **overrides) -> Snippet:
    return make_new_snippet(**overrides).with_id(snippet_id)


def ids(snippets) -> list[str]:
    return [snippet.id for snippet in snippets]
