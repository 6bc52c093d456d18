# File: flashdeck_app/modules/ai_services/logics/prompts.py
# Prompt templates for flashcard generation, picked by the kind of topic.

import re

CONTENT_LANGUAGE = 'language'
CONTENT_VOCABULARY = 'vocabulary'
CONTENT_ACADEMIC = 'academic'
CONTENT_GENERAL = 'general'

_LANGUAGES = (
    'spanish|french|german|italian|portuguese|chinese|japanese|korean|arabic|hindi|russian|'
    'indonesian|dutch|swedish|norwegian|polish|turkish|hebrew|thai|vietnamese'
)

# Only explicit language-learning phrasing switches to translation cards
LANGUAGE_PATTERNS = (
    re.compile(r'english\s+to\s+\w+', re.ASCII),
    re.compile(r'\w+\s+to\s+english', re.ASCII),
    re.compile(rf'learning\s+({_LANGUAGES})', re.ASCII),
    re.compile(rf'({_LANGUAGES})\s+(translation|vocabulary|phrases|words)', re.ASCII),
    re.compile(r'translate\s+\w+', re.ASCII),
    re.compile(r'\w+\s+translation', re.ASCII),
)

VOCABULARY_PATTERNS = (
    re.compile(r'medical\s+terminology', re.ASCII),
    re.compile(r'technical\s+terms', re.ASCII),
    re.compile(r'glossary\s+of', re.ASCII),
    re.compile(r'\w+\s+definitions', re.ASCII),
    re.compile(r'terminology\s+for', re.ASCII),
)

ACADEMIC_KEYWORDS = (
    'anatomy', 'biochemistry', 'calculus', 'organic chemistry', 'physics equations',
    'historical dates', 'literary analysis', 'psychological concepts', 'legal terms',
)


LANGUAGE_PROMPT = """Generate exactly {count} flashcards for language learning: "{topic}".{context}

Create simple, direct translation cards for language practice.

Requirements:
- Front: Words, phrases, or sentences in the source language
- Back: Direct translation in the target language
- Keep translations accurate and concise
- Focus on useful, common vocabulary and expressions
- Mix different types: everyday words, useful phrases, essential expressions
- Avoid verbose explanations - keep it simple and practical

Examples:
Front: "Hello" → Back: "Hola"
Front: "Thank you" → Back: "Merci"
Front: "Where is...?" → Back: "¿Dónde está...?"

Create practical cards for language practice and memorization."""

VOCABULARY_PROMPT = """Generate exactly {count} vocabulary flashcards for "{topic}".{context}

Requirements:
- Front: Key term, word, or concept
- Back: Clear, concise definition or explanation
- Focus on essential terminology and important concepts
- Keep definitions accurate and memorable
- Include the most relevant terms for effective learning

Create practical term/definition pairs for vocabulary mastery."""

ACADEMIC_PROMPT = """Generate exactly {count} study flashcards for the academic subject "{topic}".{context}

Requirements:
- Front: Clear questions or prompts that test key concepts
- Back: Accurate answers with essential information and brief explanations
- Focus on the most important concepts, facts, and principles
- Include variety: definitions, examples, applications, relationships
- Make content appropriate for academic study and exam preparation
- Cover different aspects of the subject systematically

Create comprehensive flashcards suitable for academic learning and assessment."""

GENERAL_PROMPT = """Generate exactly {count} effective study flashcards for "{topic}".{context}

Create flashcards that are most appropriate for this subject matter. Analyze the topic and context to determine the best format:

- For factual/conceptual learning: Use clear questions with informative answers
- For vocabulary/definitions: Use term → definition format
- For language elements: Use direct translations or simple practice pairs
- For procedures/processes: Use step-by-step or cause-effect format

Requirements:
- Choose the most effective front/back format for this specific content
- Keep information clear, accurate, and focused on key learning points
- Make cards practical for study and memorization
- Ensure appropriate difficulty level
- Cover the most important aspects of the topic

Adapt your approach based on what would be most useful for someone studying this topic."""

PROMPTS_BY_CONTENT_TYPE = {
    CONTENT_LANGUAGE: LANGUAGE_PROMPT,
    CONTENT_VOCABULARY: VOCABULARY_PROMPT,
    CONTENT_ACADEMIC: ACADEMIC_PROMPT,
    CONTENT_GENERAL: GENERAL_PROMPT,
}


def detect_content_type(topic, description=''):
    """
    Classify a deck into one of the four prompt families.

    Language patterns win over vocabulary patterns, which win over the
    academic keywords; anything else is ``general``.
    """
    combined = f"{topic or ''} {description or ''}".lower()

    if any(pattern.search(combined) for pattern in LANGUAGE_PATTERNS):
        return CONTENT_LANGUAGE
    if any(pattern.search(combined) for pattern in VOCABULARY_PATTERNS):
        return CONTENT_VOCABULARY
    if any(keyword in combined for keyword in ACADEMIC_KEYWORDS):
        return CONTENT_ACADEMIC
    return CONTENT_GENERAL


def build_prompt(topic, description, count, content_type):
    """Fill the template for ``content_type``; unknown types use the general one."""
    context = f"\nContext: {description}" if description else ''
    template = PROMPTS_BY_CONTENT_TYPE.get(content_type, GENERAL_PROMPT)
    return template.format(count=count, topic=topic, context=context)
