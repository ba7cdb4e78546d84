"""
Prompt templates sent to the text generator.
"""

REVIEW_PROMPT_TEMPLATE = """Please review the following {language} code and provide constructive feedback:

Code:
```{language}
{code}
```

Please provide:
1. Overall code quality assessment
2. Potential bugs or issues
3. Performance improvements
4. Best practices suggestions
5. Security considerations (if applicable)
6. Code style and readability improvements

Format your response in a clear, structured way."""


def build_review_prompt(code: str, language: str) -> str:
    """
    Build the review prompt for a code snippet.

    Both values are interpolated as-is; the result only ever reaches a text model.
    """
    return REVIEW_PROMPT_TEMPLATE.format(language=language, code=code)
