"""Prompt text for the document assistant.

Also holds the canned prompts the chat panel sends for quick actions and
text-selection actions, so the UI and the API agree on wording.
"""

from src.models.schemas import TextAction

SYSTEM_PROMPT = """You are an intelligent document analysis assistant. You help users understand, analyze, and extract insights from various types of documents including PDFs, Word documents, and Excel spreadsheets.

Your capabilities include:
- Summarizing document content
- Explaining complex concepts in simple terms
- Answering questions about document content
- Identifying key points and takeaways
- Providing analysis and insights
- Helping with document navigation and understanding

Always provide helpful, accurate, and contextual responses based on the document content. If you cannot access the actual document content, acknowledge this limitation and provide general guidance on how to analyze such documents."""

WELCOME_MESSAGE_ID = "welcome"
WELCOME_MESSAGE = (
    "Hello! I'm ready to help you analyze your document. You can ask me questions "
    "about the document content, request summaries, or get explanations about "
    "specific parts."
)

TRUNCATION_MARKER = "\n\n[Document truncated]"

ACTION_PROMPTS: dict[TextAction, str] = {
    TextAction.SUMMARIZE: 'Please summarize this selected text: "{text}"',
    TextAction.EXPLAIN: 'Please explain this selected text in detail: "{text}"',
}

_ACTION_INSTRUCTIONS: dict[TextAction, str] = {
    TextAction.SUMMARIZE: "Summarize the selected passage concisely.",
    TextAction.EXPLAIN: "Explain the selected passage in detail, in plain language.",
}

# (label, prompt, icon) shown while the conversation is still empty
QUICK_ACTIONS: list[tuple[str, str, str]] = [
    (
        "Summarize Document",
        "Please provide a comprehensive summary of this document.",
        "auto_awesome",
    ),
    (
        "Key Points",
        "What are the main key points and takeaways from this document?",
        "bolt",
    ),
    (
        "Ask Questions",
        "What questions should I ask about this document to better understand it?",
        "forum",
    ),
]


def action_prompt(action: TextAction, selected_text: str) -> str:
    """User message sent when a text-selection action is clicked."""
    return ACTION_PROMPTS[action].format(text=selected_text)


def truncate_document(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + TRUNCATION_MARKER


def build_context(
    document_data: str | None,
    selected_text: str | None,
    action: TextAction | None,
    limit: int,
) -> str | None:
    """Assemble the per-request context sent ahead of the conversation.

    Returns:
        Context text, or None when there is no document, selection or action.
    """
    sections: list[str] = []

    if document_data and document_data.strip() and limit > 0:
        excerpt = truncate_document(document_data.strip(), limit)
        sections.append(f"Document content:\n{excerpt}")

    if selected_text:
        sections.append(f'The user has selected this passage:\n"{selected_text}"')

    if action is not None:
        sections.append(_ACTION_INSTRUCTIONS[action])

    if not sections:
        return None
    return "\n\n".join(sections)
