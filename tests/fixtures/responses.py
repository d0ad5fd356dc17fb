EMBEDDING_VECTOR = [0.011, -0.024, 0.007, 0.031]

EMBEDDING_RESPONSE = {
    "object": "list",
    "data": [
        {"object": "embedding", "index": 0, "embedding": EMBEDDING_VECTOR}
    ],
    "model": "text-embedding-ada-002",
    "usage": {"prompt_tokens": 4, "total_tokens": 4},
}

EMBEDDING_ERROR_RESPONSE = {
    "error": {
        "message": "This model's maximum context length is 8191 tokens",
        "type": "invalid_request_error",
        "code": None,
    }
}

MATCHED_DOCUMENTS = [
    {
        "id": 17,
        "content": "  Widgets are configured in the designer panel.  ",
        "url": "https://docs.example.com/widgets",
        "similarity": 0.82,
    },
    {
        "id": 4,
        "content": "Reports can be exported to PDF from the toolbar.",
        "url": "https://docs.example.com/export",
        "similarity": 0.64,
    },
]

INVALID_KEY_ERROR_BODY = (
    '{\n    "error": {\n        "message": "Incorrect API key provided: sk-abc123secret. '
    'You can find your API key at https://platform.openai.com/account/api-keys.",\n'
    '        "type": "invalid_request_error"\n    }\n}\n'
)
