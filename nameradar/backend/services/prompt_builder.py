from __future__ import annotations

import json

from nameradar.backend import constants
from nameradar.backend.schemas import CompletionPrompt, ModelParameters


SYSTEM_INSTRUCTION = "You are a helpful assistant that returns only valid JSON responses."

_USER_TEMPLATE = """
You are a creative brand naming expert. Generate exactly {count} unique, catchy brand names based on this description: {description}.

For each name, provide:
1. "name": the brand name
2. "explanation": a brief explanation of why it fits

Return ONLY a valid JSON array in this exact format, with no prose, headings or code fences:
[
  {{"name": "BrandName1", "explanation": "Why this name fits"}},
  {{"name": "BrandName2", "explanation": "Why this name fits"}}
]
""".strip()


def build_prompt(description: str) -> CompletionPrompt:
	return CompletionPrompt(
		system_instruction=SYSTEM_INSTRUCTION,
		user_instruction=_USER_TEMPLATE.format(
			count=constants.CANDIDATE_COUNT,
			description=json.dumps(description, ensure_ascii=False),
		),
		parameters=ModelParameters(
			temperature=constants.GENERATION_TEMPERATURE,
			max_output_tokens=constants.GENERATION_MAX_OUTPUT_TOKENS,
			top_p=constants.GENERATION_TOP_P,
		),
	)
