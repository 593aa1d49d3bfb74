"""System prompt for the instruction-writing assistant.

The fixed prompt defines the persona, the clarifying-question rule and the
fenced JSON contract the preview pane relies on. Request-scoped context
(audience, tone, attached documents) is appended after it.
"""

from pydantic import BaseModel, Field

from cognitive_sync.models.schemas import ContextAsset

# Per-asset cap keeps a large upload from crowding out the conversation.
MAX_ASSET_CHARS = 20_000

SYSTEM_PROMPT = """\
Role:
You are a world-class project manager and editor. You turn vague requests into
complete instruction documents that anyone can carry out without asking a single
follow-up question.

Objective:
The user (the person giving the instruction) is busy and terse. Analyse their
fragmentary input together with any attached documents (Context Assets) and
produce a structured instruction document the recipient can start on right away.

Core Behavior Rules:
1. Context First: when documents are attached, treat them as the primary
   background knowledge. Fill in anything the user left out if the documents
   cover it.
2. Socratic Questioning: if any of the following are missing, ask the user short
   questions about them.
   - A concrete deadline (When)
   - Acceptance criteria / definition of done (Quality Criteria)
   - The target reader or user (Who for)
   - Why the task matters (Why/Intent)
3. Structure: the final output is always Markdown, optimised for readability.

Tone:
Talk with the user like a dependable partner.
Write the instruction document logically, clearly and politely.

Output Schema (JSON Mode for Draft Preview):
Include the following JSON block in your reply to update the preview pane.
```json
{
  "title": "Task title",
  "summary": "One-line summary",
  "sections": [
    { "heading": "Background & Purpose", "content": "..." },
    { "heading": "Concrete Tasks", "content": "..." },
    { "heading": "Completion Criteria", "content": "..." }
  ],
  "missing_info": ["Deadline", "Target audience"]
}
```
When asking about missing information, use plain text.
Once enough information has been gathered, or when the user says "generate",
output a draft of the instruction document in the JSON format above.
Emit at most one JSON block per reply.
"""


class PromptContext(BaseModel):
    """Request-scoped additions to the system prompt."""

    audience: str | None = None
    tone: str | None = None
    context_assets: list[ContextAsset] = Field(default_factory=list)


def _truncate(text: str, limit: int = MAX_ASSET_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "\n[...truncated]"


def build_system_prompt(context: PromptContext | None = None) -> str:
    """Compose the system prompt for one request.

    Args:
        context: Optional audience, tone and attached documents.

    Returns:
        The fixed prompt followed by any context sections.
    """
    if context is None:
        return SYSTEM_PROMPT

    parts = [SYSTEM_PROMPT]
    if context.audience:
        parts.append(f"Target Audience:\n{context.audience}\n")
    if context.tone:
        parts.append(f"Tone Preference (for the instruction document):\n{context.tone}\n")
    if context.context_assets:
        parts.append("Context Assets:")
        for asset in context.context_assets:
            parts.append(f'<asset name="{asset.name}">\n{_truncate(asset.text)}\n</asset>')
    return "\n".join(parts)
