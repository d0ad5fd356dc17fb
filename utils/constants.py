"""
Prompt templates and patterns for the RAG Chat Relay.
"""

# One-shot exemplar appended to the history of augmented queries
SYSTEM_INSTRUCTION = """You are a rigorous, sharp assistant who cares about formatting and explains things in detail. When given a CONTEXT, answer the question using only that information.
Write your answer in markdown. Output code snippets as fenced code blocks.
When there are several steps, number them 1- 2- 3-.
If you are unsure and the answer is not explicitly written in the CONTEXT, say: "Sorry, I don't know how to help with that."
If the CONTEXT contains URLs, deduplicate them and list each page's title and link under a "SOURCES" heading at the end of your answer. Never make up a URL."""

EXAMPLE_USER_CONTENT = """CONTEXT:
Next.js is a React framework for building web applications.
SOURCE: nextjs.org/docs/faq

QUESTION:
what is nextjs?
"""

EXAMPLE_ASSISTANT_CONTENT = """Next.js is a React framework for building web applications.
```js
function HomePage() {
  return <div>Welcome to Next.js!</div>
}
```

SOURCES:
- [Next.js docs](https://nextjs.org/docs/faq)"""

AUGMENTED_USER_TEMPLATE = """CONTEXT:
{context}

USER QUESTION:
{question}
"""

DOMAIN_QUESTION_TEMPLATE = "In {domain}, {question}"

# Rendering of one retrieved document inside the context block
CONTEXT_DOCUMENT_TEMPLATE = "{content}\nSOURCE: {url}\n---\n"


class Patterns:
    """Regular expression patterns applied to provider output."""
    # Provider "invalid key" errors echo the key back: "Incorrect API key provided: sk-.... You can find..."
    API_KEY_LEAK = r'provided:.*. You'
    API_KEY_REDACTED = 'provided: ***. You'


class StreamMarkers:
    """Sentinels of the OpenAI completion stream."""
    DONE = "[DONE]"
