"""
Prompt construction for AI survey drafting.

The model is asked for a single JSON object so the reply can be validated
directly into ``GeneratedSurvey``.
"""
from typing import Optional

from inquiro.models.base import QuestionType

QUESTION_TYPES = ", ".join(question_type.value for question_type in QuestionType)

SYSTEM_PROMPT = (
    "You are an expert survey designer. "
    "Always answer with a single JSON object and no surrounding text."
)


def build_survey_prompt(
    topic: str,
    number_of_questions: int,
    target_audience: str = "general public",
    additional_context: Optional[str] = None,
) -> str:
    """
    Build the user prompt for drafting a survey.

    Args:
        topic: Subject of the survey
        number_of_questions: Exact number of questions to generate
        target_audience: Who will answer the survey
        additional_context: Free-form extra guidance from the creator

    Returns:
        The prompt text
    """
    prompt = f"""Create a comprehensive survey about "{topic}" with {number_of_questions} questions for {target_audience}.

Requirements:
- Generate a compelling title and description for the survey
- Create {number_of_questions} diverse, well-crafted questions
- Use different question types ({QUESTION_TYPES}) appropriately
- For choice-based questions (MULTIPLE_CHOICE, RADIO, CHECKBOX), provide 3-5 relevant options
- Mix required and optional questions strategically
- Ensure questions are clear, unbiased, and relevant to the topic
- Questions should flow logically and gather meaningful insights

Topic: {topic}
Target Audience: {target_audience}
Number of Questions: {number_of_questions}
"""
    if additional_context:
        prompt += f"Additional Context: {additional_context}\n"

    prompt += """
The survey should be professional and engaging for the target audience.

Respond with JSON in exactly this shape:
{"title": string, "description": string, "questions": [{"text": string, "description": string (optional), "type": one of the question types above, "is_required": boolean, "options": [{"text": string}] (choice-based questions only)}]}"""
    return prompt
