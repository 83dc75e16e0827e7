# practice_mocktest/services/scoring.py
from typing import Dict, List, Optional, Sequence

from ..core.models import Question, TestResults, TopicPerformance, DifficultyPerformance
from ..core.utils import round2


def _accuracy(correct: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round2(correct / total * 100)


def calculate_results(answers: Sequence[Optional[int]], questions: Sequence[Question]) -> TestResults:
    """
    Score a finished attempt.

    ``answers[i]`` is the chosen option for ``questions[i]``, or None when the
    question was left unanswered. Topic and difficulty buckets are listed in
    the order they first appear in the test.
    """
    if len(answers) != len(questions):
        raise ValueError(
            f"Cannot score {len(answers)} answers against {len(questions)} questions"
        )

    correct_answers = 0
    incorrect_answers = 0
    unanswered_questions = 0

    topic_stats: Dict[str, List[int]] = {}
    difficulty_stats: Dict[str, List[int]] = {}

    for answer, question in zip(answers, questions):
        is_correct = answer is not None and answer == question.correct_answer

        if answer is None:
            unanswered_questions += 1
        elif is_correct:
            correct_answers += 1
        else:
            incorrect_answers += 1

        # [correct, total]
        topic = topic_stats.setdefault(question.topic, [0, 0])
        topic[1] += 1
        difficulty = difficulty_stats.setdefault(question.difficulty.value, [0, 0])
        difficulty[1] += 1
        if is_correct:
            topic[0] += 1
            difficulty[0] += 1

    total_questions = len(questions)

    return TestResults(
        score=correct_answers,
        total_questions=total_questions,
        correct_answers=correct_answers,
        incorrect_answers=incorrect_answers,
        unanswered_questions=unanswered_questions,
        percentage=_accuracy(correct_answers, total_questions),
        topic_wise_performance=[
            TopicPerformance(topic=name, correct=c, total=t, accuracy=_accuracy(c, t))
            for name, (c, t) in topic_stats.items()
        ],
        difficulty_wise_performance=[
            DifficultyPerformance(difficulty=name, correct=c, total=t, accuracy=_accuracy(c, t))
            for name, (c, t) in difficulty_stats.items()
        ],
    )
