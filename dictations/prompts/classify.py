from dictations.models.schemas import PROMPT_CATEGORIES

CLASSIFY_SYSTEM = f"""You classify short spoken dictations.
Classify the dictation into exactly ONE of these categories: {", ".join(c.value for c in PROMPT_CATEGORIES)}.

Categories:
- note: a thought, observation or piece of information to keep
- reminder: something the user wants to be reminded of at some point
- event: an appointment, meeting or anything happening at a specific time
- task: a to-do item or action the user has to do

Respond in plain JSON (no markdown code blocks) with exactly two keys:
{{"category": "<category>", "confidence": <number>}}"""


def build_classify(text: str) -> list[dict]:
    return [
        {"role": "system", "content": CLASSIFY_SYSTEM},
        {"role": "user", "content": f"Here is the dictation now: {text}"},
    ]
