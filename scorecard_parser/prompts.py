"""Instruction text sent alongside the scorecard images."""
from typing import Sequence


SCORECARD_SHAPE = """{
  "course": {
    "name": "Course Name",
    "holes": [par1, par2, ..., par18]
  },
  "players": {
    "player1": [score1, score2, ..., score18],
    "player2": [score1, score2, ..., score18]
  }
}"""

SINGLE_PROMPT = f"""Parse the following Walkabout mini golf scorecard image and output the data in this JSON format:

{SCORECARD_SHAPE}

Add one entry under "players" for every player on the card, keyed by the name written on the card.
Ensure the JSON is correctly formatted and includes all visible data from the scorecard. Only include JSON in your response."""

MULTI_PROMPT = """Parse the following Walkabout mini golf scorecard images and output the data for each image in this JSON format:

{{
  "image1": <scorecard>,
  "image2": <scorecard>,
  ...
}}

where every <scorecard> has this structure:

{shape}

The images are attached in this order: {order}.
Use exactly the keys {keys}, one per image, in the same order as the images.
Add one entry under "players" for every player on a card, keyed by the name written on the card.
Ensure the JSON is correctly formatted and includes all visible data from each scorecard. Only include JSON in your response."""


def image_key(index: int) -> str:
    """Key the model is asked to use for the image at 0-based ``index``."""
    return f"image{index + 1}"


def build_prompt(labels: Sequence[str], single: bool = False, base_prompt: str = "") -> str:
    """Instruction text for ``labels`` in attachment order.

    ``base_prompt`` (from PROMPT_FILE) replaces the built-in text entirely.
    """
    if base_prompt:
        return base_prompt
    if single:
        return SINGLE_PROMPT
    keys = [image_key(i) for i in range(len(labels))]
    order = ", ".join(f"{k} = {label}" for k, label in zip(keys, labels))
    return MULTI_PROMPT.format(shape=SCORECARD_SHAPE, order=order, keys=", ".join(f'"{k}"' for k in keys))
