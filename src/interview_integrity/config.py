"""
Configuration file for the Question Integrity tools.

Modify these values to customize classification, probing and reporting.
"""

# Backend Configuration
API_KEY_ENV_VAR = "GEMINI_API_KEY"
DEFAULT_MODEL_NAME = "gemini-2.0-flash"
REQUIRED_GENERATION_METHOD = "generateContent"
MODEL_NAME_PREFIX = "models/"
SMOKE_TEST_PROMPT = "Hello! Are you online? Reply in one word."

# Probe requests must finish inside this budget (milliseconds)
PROBE_TIMEOUT_MS = 15000

# Content Classification Settings
LINK_PATTERNS = [
    r"https?://\S+",
    r"www\.\S+",
]

# Share of non-whitespace characters taken up by links at which
# a problem statement counts as a bare link
LINK_FRACTION_THRESHOLD = 0.5

# Section headings a self-contained problem statement carries
STRUCTURED_SECTIONS = ["Input", "Output", "Example"]

# Categories whose link-citing statements must carry those sections
# (the ones filled by the judge importer)
STRUCTURED_CATEGORIES = ["DSA"]

# Output Configuration
OUTPUT_DIR = "output"
AUDIT_REPORT_JSON = "audit_report.json"
EXCERPT_LENGTH = 50

# Pre-authored corrections for known degraded questions.
# Each entry matches one record and carries its full replacement body.
DEFAULT_CORRECTIONS = [
    {
        "label": "Kanade's Perfect Multiples",
        "match": {"title_contains": "Kanade's Perfect Multiples"},
        "replacement": r"""You are given an array $A$ of $N$ integers. A subarray is called **perfect** if the product of all elements in the subarray is a multiple of $K$.

Find the number of perfect subarrays.

### Input
- The first line contains two integers $N$ ($1 \le N \le 2 \cdot 10^5$) and $K$ ($1 \le K \le 10^9$).
- The second line contains $N$ integers $A_1, A_2, \dots, A_N$ ($1 \le A_i \le 10^9$).

### Output
Print a single integer — the number of perfect subarrays.

### Example
**Input**
```
5 6
2 3 4 5 6
```

**Output**
```
9
```

### Note
A subarray is defined as a contiguous segment of the array.""",
    },
]
