"""
api/sample_questions.py — QUIZ_DATA_FILE 이 없을 때 사용하는 샘플 문제
"""

SAMPLE_QUESTIONS = [
    {
        "question": "Which keyword defines a function in Python?",
        "options": ["func", "def", "lambda", "fn"],
        "correctAnswerIndex": 1,
        "explanation": "<code>def</code> starts a function definition; <code>lambda</code> only builds anonymous expressions.",
    },
    {
        "question": "What does <code>len(&quot;abc&quot;)</code> return?",
        "options": ["2", "3", "4", "An error"],
        "correctAnswerIndex": 1,
    },
    {
        "question": "Which of these types is immutable?",
        "options": ["list", "dict", "tuple", "set"],
        "correctAnswerIndex": 2,
        "explanation": "Tuples cannot be changed after creation.",
    },
    {
        "question": "What is the result of <code>3 &gt; 2 &amp;&amp; True</code> in Python?",
        "options": ["True", "False", "SyntaxError"],
        "correctAnswerIndex": 2,
        "explanation": "Python uses <code>and</code>, not <code>&amp;&amp;</code>.",
    },
    {
        "question": "Which module provides regular expressions?",
        "options": ["regex", "re", "pattern", "string"],
        "correctAnswerIndex": 1,
    },
]
