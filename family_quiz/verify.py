#!/usr/bin/env python3
"""
Verification script for Family Quiz question sets
Checks that written questions have well-formed options and that the marked
answer matches the relationship the engine derives for the two members
"""

import json
from typing import List

from family_quiz.composition import relate
from family_quiz.distractors import NUM_OPTIONS
from family_quiz.relations import FamilyMember, normalize


def load_questions(jsonl_path: str) -> List[dict]:
    """Load question records from JSONL"""
    questions = []
    with open(jsonl_path, 'r', encoding='utf-8') as f:
        for line in f:
            if line.strip():
                questions.append(json.loads(line.strip()))
    return questions


def verify_options(record: dict) -> bool:
    """Verify the choices have the right shape"""
    choices = record.get('choices') or {}
    correct = record.get('correct_relation')
    options = list(choices.values())

    if len(options) != NUM_OPTIONS:
        print(f"  ❌ Expected {NUM_OPTIONS} choices, got {len(options)}")
        return False

    if len(set(options)) != len(options):
        print(f"  ❌ Duplicate choices: {options}")
        return False

    if options.count(correct) != 1:
        print(f"  ❌ Correct relation appears {options.count(correct)} times: {correct}")
        return False

    letter = record.get('answer')
    if choices.get(letter) != correct:
        print(f"  ❌ Answer letter {letter} does not point at the correct relation")
        return False

    return True


def verify_relation(record: dict) -> bool:
    """Recompute the relationship from the two members and compare"""
    member_a = FamilyMember.from_dict(record['member_a'])
    member_b = FamilyMember.from_dict(record['member_b'])
    expected = relate(
        normalize(member_a.relation_to_ego),
        normalize(member_b.relation_to_ego),
        member_a.name,
        member_b.name,
    )
    if expected != record.get('correct_relation'):
        print(f"  ❌ Marked '{record.get('correct_relation')}', engine derives '{expected}'")
        return False
    return True


def verify_record(record: dict) -> bool:
    try:
        return verify_options(record) and verify_relation(record)
    except (KeyError, ValueError, AttributeError, TypeError) as e:
        print(f"  ❌ Malformed record: {e}")
        return False


def verify_file(jsonl_path: str) -> bool:
    questions = load_questions(jsonl_path)
    print(f"Verifying {len(questions)} questions from {jsonl_path}")

    failed = 0
    for i, record in enumerate(questions, 1):
        if not verify_record(record):
            print(f"  Question {i} ({record.get('id', '??')}) failed")
            failed += 1

    if failed:
        print(f"❌ {failed}/{len(questions)} question(s) failed")
        return False

    print(f"✓ All {len(questions)} questions verified")
    return True


if __name__ == "__main__":
    import sys
    path = sys.argv[1] if len(sys.argv) > 1 else "data/json/family_quiz.jsonl"
    sys.exit(0 if verify_file(path) else 1)
