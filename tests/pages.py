# File: tests/pages.py
"""HTML building blocks shared by the test modules."""
import json


def words(n: int, word: str = "word") -> str:
    """Return *n* space-separated words."""
    return " ".join([word] * n)


def faq_block() -> str:
    data = {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": "What is AEO?",
                "acceptedAnswer": {"@type": "Answer", "text": "Answer-engine optimization."},
            }
        ],
    }
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'
