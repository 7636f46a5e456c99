"""Prompt templates for README generation and continuation."""

from __future__ import annotations

from readme_updater.generation.models import GenerationRequest, SizeClass, SizeDirective

UPDATE_PREAMBLE = """\
I need to update a README.md file based on recent code changes in my repository.

Focus on updating:
1. Feature documentation that matches the new code
2. Installation or usage instructions if they've changed
3. API documentation if relevant APIs were modified
4. Examples that should be updated to match new functionality

Only make changes that are relevant to the code changes shown. Keep the existing \
structure and formatting where possible.\
"""

NEW_PREAMBLE = """\
I need you to generate a new README.md file for my repository. There is no existing \
README, so write one from scratch based on the changes and commit history below.

The README should include:
1. A title and brief description of the project based on what you can infer
2. Installation instructions
3. Usage examples
4. Features
5. Configuration options if applicable
6. Any other relevant sections

Use standard README conventions and proper markdown formatting.\
"""

BODY_TEMPLATE = """\
Current README content:
```
{current_document}
```

Recent code changes:
```
{change_summary}
```

Recent commit messages:
```
{history_log}
```\
"""

CLOSING_INSTRUCTION = """\
Start your reply with a short summary (1-3 sentences) of what you changed, then \
provide the complete README.md inside a single ```markdown fenced block. Return the \
COMPLETE document, including the parts that did not change. Do not leave any \
section unfinished and do not stop before the end of the document.\
"""

CONTINUATION_TEMPLATE = """\
The README.md below was cut off before it was finished:

```markdown
{partial_document}
```

Continue writing from where it stops. Do not repeat or rewrite content that is \
already complete. Return the COMPLETE README.md, including the portion above \
followed by your continuation, inside a single ```markdown fenced block, and finish \
every section.\
"""

_SIZE_DIRECTIVES: dict[SizeClass, SizeDirective] = {
    SizeClass.small: SizeDirective(
        guidance=(
            "Keep the README concise: a short overview, installation, and a minimal "
            "usage example. Aim for well under 1000 words."
        ),
        max_tokens=2000,
    ),
    SizeClass.medium: SizeDirective(
        guidance=(
            "Write a README of moderate length: cover every important feature with "
            "brief explanations and representative examples."
        ),
        max_tokens=10000,
    ),
    SizeClass.large: SizeDirective(
        guidance=(
            "Write a comprehensive README: document every feature, configuration "
            "option, and API in detail with thorough examples."
        ),
        max_tokens=20000,
    ),
}


def build_size_directive(size_class: SizeClass | str) -> SizeDirective:
    """Map a size class to its prompt guidance and output ceiling."""
    return _SIZE_DIRECTIVES[SizeClass(size_class)]


def build_prompt(request: GenerationRequest) -> str:
    """Render the generation prompt for a request.

    Sections appear in a fixed order: preamble, fenced current README (may be
    empty), fenced change summary, fenced commit log, size guidance, closing
    instruction.
    """
    directive = build_size_directive(request.size_class)
    preamble = NEW_PREAMBLE if request.is_new_document else UPDATE_PREAMBLE
    body = BODY_TEMPLATE.format(
        current_document=request.current_document,
        change_summary=request.change_summary,
        history_log=request.history_log,
    )
    return "\n\n".join([preamble, body, directive.guidance, CLOSING_INSTRUCTION])


def build_continuation_prompt(partial_document: str) -> str:
    """Render the prompt asking a provider to finish a truncated README."""
    return CONTINUATION_TEMPLATE.format(partial_document=partial_document)
