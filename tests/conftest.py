"""
Pytest configuration and shared fixtures for the Question Integrity tests.
"""
import json
import tempfile
from pathlib import Path
from typing import List
from unittest.mock import Mock, MagicMock

import pytest

from interview_integrity.models.question_models import Question
from interview_integrity.models.audit_models import Correction
from interview_integrity.models.question_models import QuestionFilter
from interview_integrity.storage.memory import InMemoryQuestionStore


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


# ============================================================================
# ENVIRONMENT FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_env_vars(monkeypatch, temp_dir):
    """API key in the environment, run from a directory without a .env file."""
    monkeypatch.chdir(temp_dir)
    test_api_key = "test-gemini-api-key-12345"
    monkeypatch.setenv("GEMINI_API_KEY", test_api_key)
    return {"GEMINI_API_KEY": test_api_key}


@pytest.fixture
def clean_env(monkeypatch, temp_dir):
    """No API key anywhere: not in the environment, no .env file."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.delenv("GEMINI_API_KEY")


# ============================================================================
# QUESTION BODIES
# ============================================================================

STRUCTURED_BODY = """Given an array of N integers, find the length of the longest strictly increasing subsequence.

### Input
- The first line contains an integer N (1 <= N <= 10^5).
- The second line contains N integers.

### Output
Print a single integer, the length of the longest increasing subsequence.

### Example
**Input**
```
6
10 9 2 5 3 7
```

**Output**
```
3
```
"""

LINK_ONLY_BODY = "http://codeforces.com/problemset/problem/1999/A"

IMPORTED_PLACEHOLDER_BODY = (
    'Solve the problem "Two Buttons" from Codeforces.\n\n'
    "You can view the full problem statement here: "
    "https://codeforces.com/problemset/problem/520/B\n\n"
    "Input/Output format as specified in the link."
)

SYSTEM_DESIGN_BODY = (
    "Design a secure API for a hiring platform. Explain how HTTPS works internally "
    "and what risks would exist if only HTTP were used."
)


@pytest.fixture
def structured_body() -> str:
    return STRUCTURED_BODY


@pytest.fixture
def imported_placeholder_body() -> str:
    return IMPORTED_PLACEHOLDER_BODY


@pytest.fixture
def system_design_body() -> str:
    return SYSTEM_DESIGN_BODY


# ============================================================================
# MODEL FIXTURES - Question
# ============================================================================

def make_question(question_id: str, title: str, body: str, category: str = "DSA") -> Question:
    return Question(
        id=question_id,
        title=title,
        category=category,
        topic="Arrays",
        domain=category,
        problem_statement=body,
        content=body,
        difficulty="MEDIUM",
    )


@pytest.fixture
def complete_question() -> Question:
    return make_question("q-1", "Longest Increasing Subsequence", STRUCTURED_BODY)


@pytest.fixture
def degraded_question() -> Question:
    return make_question("q-2", "Kanade's Perfect Multiples", LINK_ONLY_BODY)


@pytest.fixture
def sample_questions() -> List[Question]:
    """Five questions, two of them stored as bare links."""
    return [
        make_question("q-1", "Longest Increasing Subsequence", STRUCTURED_BODY),
        make_question("q-2", "Kanade's Perfect Multiples", LINK_ONLY_BODY),
        make_question("q-3", "HTTP vs HTTPS", SYSTEM_DESIGN_BODY, category="SYSTEM_DESIGN"),
        make_question("q-4", "Two Buttons", "Solve it here: http://codeforces.com/problemset/problem/520/B"),
        make_question("q-5", "Two Sum", STRUCTURED_BODY.replace("longest strictly increasing subsequence", "two numbers adding to K")),
    ]


@pytest.fixture
def memory_store(sample_questions) -> InMemoryQuestionStore:
    return InMemoryQuestionStore(sample_questions)


@pytest.fixture
def sample_correction(structured_body) -> Correction:
    return Correction(
        label="Kanade's Perfect Multiples",
        match=QuestionFilter(title_contains="Kanade's Perfect Multiples"),
        replacement=structured_body,
    )


# ============================================================================
# JSON EXPORT FIXTURES
# ============================================================================

@pytest.fixture
def questions_json(temp_dir, sample_questions) -> Path:
    """Question table export in the platform's camelCase format."""
    records = []
    for q in sample_questions:
        record = q.model_dump(by_alias=True, exclude_none=True)
        record["rubric"] = "Check correctness"
        records.append(record)

    json_file = temp_dir / "questions.json"
    json_file.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return json_file


# ============================================================================
# MOCK GOOGLE AI API FIXTURES
# ============================================================================

def make_model(name: str, display_name: str, actions: List[str]) -> Mock:
    model = Mock()
    model.name = name
    model.display_name = display_name
    model.supported_actions = actions
    return model


@pytest.fixture
def mock_models() -> List[Mock]:
    """Mixed model listing: three of five support generateContent."""
    return [
        make_model("models/gemini-pro", "Gemini Pro", ["generateContent", "countTokens"]),
        make_model("models/gemini-2.0-flash", "Gemini 2.0 Flash", ["generateContent"]),
        make_model("models/text-embedding-004", "Text Embedding 004", ["embedContent"]),
        make_model("models/gemini-flash-latest", "Gemini Flash Latest", ["countTokens", "generateContent"]),
        make_model("models/aqa", "Model that performs Attributed Question Answering", ["generateAnswer"]),
    ]


@pytest.fixture
def mock_genai_client(mock_models):
    """Create a mock Google GenAI client."""
    client = MagicMock()
    client.models = MagicMock()
    client.models.list = MagicMock(return_value=mock_models)
    client.models.generate_content = MagicMock()
    return client


@pytest.fixture
def question_factory():
    """Build a Question from an id, title and body."""
    return make_question


@pytest.fixture
def model_factory():
    """Build a mock backend model from a name, display name and actions."""
    return make_model
