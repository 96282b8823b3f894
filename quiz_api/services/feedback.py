import logging
from typing import Dict, List, Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import PromptTemplate
from langchain_openai import AzureChatOpenAI

from quiz_api.core.config import Settings
from quiz_api.domain.quiz_domain import QuizDomain
from quiz_api.schemas.quiz import OptionResponse, SelectedOptionInput

logger = logging.getLogger(__name__)

FEEDBACK_PROMPT = """
The user attempted a quiz for the "{scenario_name}" scenario.
Here's a summary of their performance:

{questions_summary}
The user's total score was {total_score} out of a possible {max_score}.

Based on this performance, provide an overall summary feedback.
The feedback should:
1. Acknowledge their overall performance (e.g., excellent, good understanding, areas to improve).
2. Highlight one or two key strengths demonstrated by their high-point answers.
3. Suggest one or two general areas for improvement based on answers that received low or zero points.
4. Offer a piece of general advice or encouragement related to preparedness for the given scenario.
5. Maintain an encouraging, educational, and supportive tone.
Do not list each question and answer again in your feedback; summarize the patterns.
The feedback must not be longer than {max_length} characters.
"""


class FeedbackService:
    """Generates a short coaching summary for a completed attempt"""

    def __init__(self, settings: Settings, llm=None):
        self.settings = settings
        self.llm = llm
        if self.llm is None and settings.feedback_configured:
            self.llm = self._get_llm()

    @property
    def enabled(self) -> bool:
        return self.llm is not None

    def _get_llm(self, temperature: float = 0.4):
        """Get Azure OpenAI LLM instance"""
        return AzureChatOpenAI(
            openai_api_version=self.settings.AOAI_API_VERSION,
            azure_deployment=self.settings.AOAI_DEPLOY_GPT4O_MINI,
            temperature=temperature,
            api_key=self.settings.AOAI_API_KEY,
            azure_endpoint=self.settings.AOAI_ENDPOINT,
        )

    def _summarize_questions(
        self,
        selected_options: List[SelectedOptionInput],
        options_by_question: Dict[int, List[OptionResponse]],
    ) -> str:
        lines = []
        for selected in selected_options:
            question_label = selected.question_text or f"Question ID {selected.question_id}"
            options = options_by_question.get(selected.question_id) or []
            if not options:
                lines.append(f'Question "{question_label}": options data missing.\n')
                continue

            chosen = next((o for o in options if o.option_id == selected.option_id), None)
            lines.append(f'Question: "{question_label}"')
            lines.append("  All Options:")
            for option in options:
                lines.append(f'    - "{option.option_text}" (Points: {option.points})')
            if chosen:
                lines.append(
                    f'  User\'s Answer: "{chosen.option_text}" (Awarded: {chosen.points} points)\n'
                )
            else:
                lines.append("  User's Answer: Not Answered (Awarded: 0 points)\n")
        return "\n".join(lines)

    def generate_feedback(
        self,
        scenario_name: str,
        selected_options: List[SelectedOptionInput],
        options_by_question: Dict[int, List[OptionResponse]],
        total_score: int,
    ) -> Optional[str]:
        """
        Ask the LLM for feedback on an attempt.

        Returns None when feedback is disabled or the LLM call fails; a
        missing feedback text never blocks a submission.
        """
        if not self.enabled:
            return None

        max_score = sum(QuizDomain.max_points_by_question(options_by_question).values())
        prompt = PromptTemplate.from_template(FEEDBACK_PROMPT)
        chain = prompt | self.llm | StrOutputParser()

        try:
            logger.info(f"🧠 Requesting attempt feedback for scenario '{scenario_name}'")
            feedback = chain.invoke(
                {
                    "scenario_name": scenario_name,
                    "questions_summary": self._summarize_questions(
                        selected_options, options_by_question
                    ),
                    "total_score": total_score,
                    "max_score": max_score,
                    "max_length": self.settings.FEEDBACK_MAX_LENGTH,
                }
            )
        except Exception as e:
            logger.warning(f"⚠️ Feedback generation failed: {e}")
            return None

        return QuizDomain.truncate_feedback(feedback, self.settings.FEEDBACK_MAX_LENGTH)
