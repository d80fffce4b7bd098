import random
import logging
import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from family_quiz.config import QuizConfig, setup_logging
from family_quiz.question import QuizQuestion, build_question
from family_quiz.relations import FamilyMember


def load_members(json_path) -> List[FamilyMember]:
    """Load member records from a JSON list (or JSONL), skipping unusable ones"""
    text = Path(json_path).read_text(encoding="utf-8")
    stripped = text.strip()
    if stripped.startswith("["):
        lines = None
        records = json.loads(stripped)
    else:
        lines = [line for line in text.splitlines() if line.strip()]
        records = lines

    members = []
    for i, record in enumerate(records, 1):
        try:
            if lines is not None:
                record = json.loads(record)
            if not isinstance(record, dict):
                raise ValueError(f"expected an object, got {type(record).__name__}")
            members.append(FamilyMember.from_dict(record))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            logging.warning(f"Skipping family member record {i}: {e}")
            continue
    return members


def question_to_record(question: QuizQuestion, question_id: str) -> Dict:
    choices = {}
    correct_letter = None
    for i, option in enumerate(question.options):
        letter = chr(65 + i)
        choices[letter] = option
        if option == question.correct_relation:
            correct_letter = letter

    return {
        'id': question_id,
        'member_a': question.member_a.to_dict(),
        'member_b': question.member_b.to_dict(),
        'question': f"How are {question.member_a.name} and {question.member_b.name} related?",
        'correct_relation': question.correct_relation,
        'answer': correct_letter,
        'choices': choices,
    }


def generate_questions(members: Sequence[FamilyMember], num_questions: int,
                       rng: Optional[random.Random] = None,
                       retry_budget: Optional[int] = None) -> List[QuizQuestion]:
    if rng is None:
        rng = random.Random()
    if retry_budget is None:
        retry_budget = QuizConfig().pair_retry_budget

    questions = []
    used_pairs = frozenset()
    for _ in range(num_questions):
        result = build_question(members, used_pairs, rng=rng, retry_budget=retry_budget)
        if result is None:
            logging.warning(f"Need at least 2 family members to build questions, have {len(members)}")
            break
        question, used_pairs = result
        questions.append(question)
    return questions


def create_dataset_files(members: Sequence[FamilyMember], num_questions: int = 10,
                         output_dir=None, rng: Optional[random.Random] = None,
                         name: str = "family_quiz") -> Tuple[pd.DataFrame, List[Dict]]:
    """
    Generate a question set and write it as CSV and JSONL.

    Args:
        members: Family members to ask about
        num_questions: Number of questions to generate
        output_dir: Directory that receives csv/ and json/ subdirectories
        rng: Random source
        name: Base file name

    Returns:
        Tuple[pd.DataFrame, List[Dict]]: (dataframe, json records)
    """
    print(f"Generating {num_questions} family quiz questions from {len(members)} members...")

    questions = generate_questions(members, num_questions, rng=rng)
    all_generated_data = [question_to_record(q, f'{name}_{i}') for i, q in enumerate(questions)]

    output = []
    for item in all_generated_data:
        output.append({
            'id': item['id'],
            'member_a': item['member_a']['name'],
            'member_b': item['member_b']['name'],
            'question': item['question'],
            'correct_relation': item['correct_relation'],
            'answer': item['answer'],
            'choices': json.dumps(item['choices'], ensure_ascii=False),
        })
    df = pd.DataFrame(output, columns=['id', 'member_a', 'member_b', 'question',
                                       'correct_relation', 'answer', 'choices'])

    print(f"\n=== Generation Summary ===")
    print(f"Total questions generated: {len(df)}")
    print(f"Unique member pairs: {len({q.pair_key for q in questions})}")

    output_dir = Path(output_dir) if output_dir else Path.cwd() / "data"

    csv_dir = output_dir / "csv"
    csv_dir.mkdir(parents=True, exist_ok=True)
    csv_path = csv_dir / f"{name}.csv"
    df.to_csv(csv_path, index=False, encoding="utf-8-sig")
    print(f"\nCSV file created! -> {csv_path}")

    json_dir = output_dir / "json"
    json_dir.mkdir(parents=True, exist_ok=True)
    jsonl_path = json_dir / f"{name}.jsonl"
    with open(jsonl_path, 'w', encoding='utf-8') as f:
        for item in all_generated_data:
            f.write(json.dumps(item, ensure_ascii=False) + '\n')
    print(f"JSONL file created! -> {jsonl_path}")

    return df, all_generated_data


def main(argv=None):
    import argparse

    config = QuizConfig.from_env()

    parser = argparse.ArgumentParser(description="Family Quiz question set generator")
    parser.add_argument("--members", type=str, required=True,
                        help="JSON or JSONL file with family member records")
    parser.add_argument("--num", type=int, default=config.questions_per_round,
                        help="Number of questions to generate")
    parser.add_argument("--seed", type=int, default=config.seed,
                        help="Random seed for reproducible question sets")
    parser.add_argument("--output", type=str, default="data",
                        help="Output directory")

    args = parser.parse_args(argv)
    setup_logging(config.log_level)

    members = load_members(args.members)
    create_dataset_files(members, num_questions=args.num, output_dir=args.output,
                         rng=random.Random(args.seed))


if __name__ == '__main__':
    main()
