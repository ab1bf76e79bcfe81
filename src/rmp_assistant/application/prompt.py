"""Prompt composition: system instruction plus retrieved professor context.

Everything here is pure text templating so it can be tested without any
provider.
"""

from __future__ import annotations

from collections.abc import Sequence

from rmp_assistant.domain.models import ChatMessage, RetrievedMatch

TOP_K = 3

RESULTS_DELIMITER = "\n\n---\n"
RESULTS_HEADER = "Returned results from vector db (done automatically):"
NO_RESULTS = "No relevant professors were found in the vector db for this query."

SYSTEM_PROMPT = """\
You are a helpful and knowledgeable assistant for a RateMyProfessor agent. Your \
task is to help students find the best professors according to their queries. \
When a user asks a question, provide information about the top 3 professors \
that match their query. The relevant professor data (names, subjects, average \
star ratings and brief reviews) is retrieved automatically and appended to the \
user's latest message. Only use that data; do not invent professors.

Provide information in a clear, concise, and informative manner. If the \
user's query is ambiguous or requires more specific details, ask clarifying \
questions to refine the search.

Format the response as follows:

1. **Professor Name**: [Name]
   - **Subject**: [Subject]
   - **Rating**: [Average star rating out of 5]
   - **Review**: [A short summary of the professor's teaching style and strengths]

Repeat this format for each professor returned.

If no relevant information is found, tell the user that no suitable matches \
were identified for their query and suggest ways to refine their search.
"""


def _format_stars(stars: object) -> str:
    if isinstance(stars, bool):
        return str(stars)
    if isinstance(stars, (int, float)):
        return f"{stars:g}"
    return str(stars)


def render_match(match: RetrievedMatch) -> str:
    """Render one match; metadata fields that are missing are left out."""
    lines = [f"Professor: {match.id}"]
    if match.subject:
        lines.append(f"Subject: {match.subject}")
    if match.stars is not None:
        lines.append(f"Rating: {_format_stars(match.stars)} / 5")
    if match.review:
        lines.append(f"Review: {match.review}")
    return "\n".join(lines)


def render_matches(matches: Sequence[RetrievedMatch]) -> str:
    """Render the retrieval block appended to the user's last message.

    Never returns an empty block: with no matches it says so explicitly.
    """
    if not matches:
        return f"{RESULTS_DELIMITER}{RESULTS_HEADER}\n{NO_RESULTS}"

    entries = "\n\n".join(render_match(m) for m in matches)
    return f"{RESULTS_DELIMITER}{RESULTS_HEADER}\n\n{entries}"


def compose_messages(
    messages: Sequence[ChatMessage],
    matches: Sequence[RetrievedMatch],
    system_prompt: str = SYSTEM_PROMPT,
) -> list[dict]:
    """Build the message list sent to the chat model.

    ``[system] + prior history + [user(last content + retrieval block)]``.
    Client-supplied system messages are dropped from the history so the
    model always sees exactly one system message.
    """
    *prior, last = messages

    history = [
        {"role": m.role, "content": m.content} for m in prior if m.role != "system"
    ]
    return [
        {"role": "system", "content": system_prompt},
        *history,
        {"role": "user", "content": last.content + render_matches(matches)},
    ]
