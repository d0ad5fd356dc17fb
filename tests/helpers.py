import json


def completion_chunk(content=None, finish_reason=None):
    """One chat.completion.chunk event as the provider streams it."""
    delta = {} if content is None else {"content": content}
    payload = {
        "id": "chatcmpl-test",
        "object": "chat.completion.chunk",
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}],
    }
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


def sse_body(*tokens, done=True):
    """A full completion stream: role chunk, one chunk per token, stop chunk, [DONE]."""
    body = 'data: {"choices":[{"index":0,"delta":{"role":"assistant"}}]}\n\n'
    body += "".join(completion_chunk(token) for token in tokens)
    body += completion_chunk(finish_reason="stop")
    if done:
        body += "data: [DONE]\n\n"
    return body


async def collect(async_iterator):
    """Drain an async iterator into a list."""
    return [item async for item in async_iterator]


async def bytes_stream(*chunks):
    for chunk in chunks:
        yield chunk


def assert_augmented_message(message, question):
    """Assert message is a user turn carrying a CONTEXT block and the question."""
    assert message["role"] == "user"
    assert message["content"].startswith("CONTEXT:\n")
    assert f"USER QUESTION:\n{question}\n" in message["content"], (
        f"Question '{question}' not found in augmented message:\n{message['content']}"
    )
