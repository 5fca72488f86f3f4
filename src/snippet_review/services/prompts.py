"""Prompt templates and the text heuristics applied before calling the model."""

import re

from snippet_review.entities import PromptKind

INVALID_INPUT_MESSAGE = "⚠️ Error: Please provide a valid input."
SAFETY_BLOCKED_MESSAGE = (
    "⚠️ The response was blocked due to safety concerns. "
    "Please revise your input or ask a different question."
)
GENERIC_FAILURE_MESSAGE = "⚠️ Error: Unable to process your request. Please try again later."

RESTRICTED_TOPICS_PHRASE = "things you can't process"
SAFE_REPHRASING = (
    "What types of content or topics are restricted by Google's Generative AI safety filters?"
)

# Function/class keywords of common languages, C includes and PHP open tags
CODE_PATTERN = re.compile(
    r"def\s+\w+\(|function\s+\w+\(|class\s+\w+|public\s+class\s+\w+|int\s+\w+\(|#include|<\?php"
)

LANGUAGE_DETECTION_TEMPLATE = """
Identify the programming language of the following code snippet.
Respond with only the name of the language (e.g., Python, Java, C, C++, JavaScript, etc.).

Code:
{code}
"""

REVIEW_TEMPLATE = """
You are an expert in programming languages, specializing in {language} and other popular languages like Python, Java, C, C++, and JavaScript.
Your task is to:
1. Analyze the provided {language} code and suggest improvements line by line.
2. Provide the improved {language} code with proper indentation.
3. Convert the improved {language} code to Python, Java, C, and C++.
4. Explain the time and space complexities of the improved code.
5. Provide personalized learning links for further study.

Respond in the following format:
### Identified Language
{language}

### Suggestions
- [Your suggestions for improvements]

### Improved {language} Code
```{fence}
[Improved {language} code here]
```

### Improved Code in Python
```python
[Python code here]
```

### Improved Code in Java
```java
[Java code here]
```

### Improved Code in C
```c
[C code here]
```

### Improved Code in C++
```cpp
[C++ code here]
```

### Time and Space Complexities
- Time Complexity: [Explain time complexity]
- Space Complexity: [Explain space complexity]

### Personalized Learning Links
- [Link 1]
- [Link 2]

**Important Notes:**
- Respond directly and conversationally. Do not explain your thought process unless explicitly asked.
- Keep the tone friendly, professional, and concise.
- Avoid step-by-step reasoning unless the user requests it.
"""

CONVERSATION_PROMPT = """
You are a friendly and knowledgeable AI assistant. Your task is to engage in natural conversation with the user.
Respond in a conversational tone, keeping your answers concise and helpful.
If the user asks about programming or code, guide them to share the code for analysis.
Otherwise, respond to their questions or statements in a friendly and engaging manner.

**Important Notes:**
- Avoid explaining your thought process unless explicitly asked.
- Keep the tone friendly, professional, and concise.
- Do not provide step-by-step reasoning unless requested.
"""


def is_blank(prompt: str | None) -> bool:
    """Check whether a prompt is missing, empty or whitespace-only."""
    return not prompt or not prompt.strip()


def preprocess_prompt(prompt: str) -> str:
    """Rephrase prompts that tend to trip the provider's safety filters.

    Args:
        prompt: The user's prompt

    Returns:
        SAFE_REPHRASING for prompts asking about restricted topics,
        otherwise the prompt unchanged
    """
    if RESTRICTED_TOPICS_PHRASE in prompt.lower():
        return SAFE_REPHRASING
    return prompt


def looks_like_code(text: str) -> bool:
    """Check for syntactic markers of common programming languages."""
    return CODE_PATTERN.search(text) is not None


def classify_prompt(text: str) -> PromptKind:
    """Classify a prompt as code or general conversation.

    Args:
        text: The (possibly preprocessed) prompt

    Returns:
        PromptKind.CODE if any code marker matches, else PromptKind.CONVERSATION
    """
    return PromptKind.CODE if looks_like_code(text) else PromptKind.CONVERSATION


def build_language_detection_prompt(code: str) -> str:
    return LANGUAGE_DETECTION_TEMPLATE.format(code=code)


def build_review_prompt(language: str, code: str) -> str:
    """Build the structured review request for a snippet.

    Args:
        language: Language name reported by the model (e.g. "Python")
        code: The snippet to review

    Returns:
        The review instructions, a blank line, then the snippet
    """
    instructions = REVIEW_TEMPLATE.format(language=language, fence=language.lower())
    return f"{instructions}\n\n{code}"


def build_conversation_prompt(text: str) -> str:
    return f"{CONVERSATION_PROMPT}\n\n{text}"
