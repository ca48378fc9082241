import os
import sys

from openai import OpenAI, OpenAIError

from color_io import to_data_url

MOOD_MODEL = os.getenv("LUMINA_MOOD_MODEL", "gpt-4o-mini")

MOOD_PROMPT = (
    "Analyze the color grading of this image. Provide a one-sentence, artistic "
    "description of its mood, color balance, and cinematic quality (e.g., \"Warm "
    "golden hour tones with crushed shadows and high contrast, evoking a nostalgic "
    "70s film aesthetic\"). Keep it concise."
)

EMPTY_REPLY_TEXT = "Analyzed color profile successfully."
FALLBACK_TEXT = "Cinematic grade detected with custom histogram mapping."

def describe_mood(image, client=None, model=MOOD_MODEL):
    """
    One-sentence mood description of a reference image.

    Purely cosmetic: API failures are reported on stderr and answered with
    FALLBACK_TEXT so grading never depends on this call.
    """
    try:
        if client is None:
            client = OpenAI(api_key=os.getenv("OPENAI_API_KEY"))
        resp = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "user", "content": [
                    {"type": "text", "text": MOOD_PROMPT},
                    {"type": "image_url", "image_url": {"url": to_data_url(image, "PNG")}},
                ]},
            ],
        )
        text = (resp.choices[0].message.content or "").strip()
    except (OpenAIError, IndexError, AttributeError) as e:
        print(f"Mood analysis failed: {e}", file=sys.stderr)
        return FALLBACK_TEXT

    return text or EMPTY_REPLY_TEXT
