# practice_mocktest/core/dummy_data.py
import logging
from typing import List, Dict, Any

from .models import Question

logger = logging.getLogger(__name__)

# Sample question bank for development when the questions collection is empty
DUMMY_QUESTIONS: List[Dict[str, Any]] = [
    # History
    {
        "topic": "History",
        "subtopic": "Ancient India",
        "question": "Who was the founder of the Maurya Empire?",
        "options": ["Chandragupta Maurya", "Ashoka", "Bindusara", "Chanakya"],
        "correct_answer": 0,
        "difficulty": "easy",
        "explanation": "Chandragupta Maurya founded the Maurya Empire around 322 BCE with the help of Chanakya.",
        "tags": ["maurya", "ancient-india", "empire"],
    },
    {
        "topic": "History",
        "subtopic": "Medieval India",
        "question": "Which Mughal emperor built the Taj Mahal?",
        "options": ["Akbar", "Jahangir", "Shah Jahan", "Aurangzeb"],
        "correct_answer": 2,
        "difficulty": "easy",
        "explanation": "Shah Jahan built the Taj Mahal in memory of Mumtaz Mahal between 1632 and 1653.",
        "tags": ["mughal", "architecture"],
    },
    {
        "topic": "History",
        "subtopic": "Ancient India",
        "question": "Which of the following was NOT a part of the Triratna in Buddhism?",
        "options": ["Buddha", "Dhamma", "Sangha", "Karma"],
        "correct_answer": 3,
        "difficulty": "medium",
        "explanation": "The Three Jewels are the Buddha, the Dhamma and the Sangha. Karma is a concept, not one of the jewels.",
        "tags": ["buddhism", "religion"],
    },
    {
        "topic": "History",
        "subtopic": "Medieval India",
        "question": "In which year was the Vijayanagara Empire founded?",
        "options": ["1336", "1346", "1356", "1366"],
        "correct_answer": 0,
        "difficulty": "medium",
        "explanation": "Harihara I and Bukka Raya I founded the Vijayanagara Empire in 1336 CE.",
        "tags": ["vijayanagara", "empire"],
    },
    {
        "topic": "History",
        "subtopic": "Ancient India",
        "question": "Which Gupta ruler is known from the Allahabad Pillar inscription composed by Harisena?",
        "options": ["Chandragupta I", "Samudragupta", "Chandragupta II", "Kumaragupta I"],
        "correct_answer": 1,
        "difficulty": "hard",
        "explanation": "Harisena's Prayaga Prashasti on the Allahabad Pillar records the campaigns of Samudragupta.",
        "tags": ["gupta", "inscriptions"],
        "pyq_year": 2019,
    },
    {
        "topic": "History",
        "subtopic": "Modern India",
        "question": "The Ilbert Bill controversy (1883) took place during the tenure of which Viceroy?",
        "options": ["Lord Lytton", "Lord Ripon", "Lord Curzon", "Lord Dufferin"],
        "correct_answer": 1,
        "difficulty": "hard",
        "explanation": "The Ilbert Bill was introduced under Lord Ripon to let Indian judges try European offenders.",
        "tags": ["viceroy", "modern-india"],
    },
    # Geography
    {
        "topic": "Geography",
        "subtopic": "Indian Geography",
        "question": "Which is the longest river flowing entirely within India?",
        "options": ["Godavari", "Ganga", "Krishna", "Narmada"],
        "correct_answer": 1,
        "difficulty": "easy",
        "explanation": "The Ganga is the longest river in India, flowing about 2,525 km.",
        "tags": ["rivers"],
    },
    {
        "topic": "Geography",
        "subtopic": "World Geography",
        "question": "Which is the largest ocean on Earth?",
        "options": ["Atlantic Ocean", "Indian Ocean", "Pacific Ocean", "Arctic Ocean"],
        "correct_answer": 2,
        "difficulty": "easy",
        "explanation": "The Pacific Ocean covers roughly one third of the Earth's surface.",
        "tags": ["oceans"],
    },
    {
        "topic": "Geography",
        "subtopic": "Physical Geography",
        "question": "The Tropic of Cancer does NOT pass through which of these Indian states?",
        "options": ["Rajasthan", "Odisha", "Tripura", "Jharkhand"],
        "correct_answer": 1,
        "difficulty": "medium",
        "explanation": "The Tropic of Cancer crosses eight states; Odisha is not one of them.",
        "tags": ["latitudes"],
        "pyq_year": 2021,
    },
    {
        "topic": "Geography",
        "subtopic": "Indian Geography",
        "question": "Which pass connects Srinagar with Leh?",
        "options": ["Zoji La", "Nathu La", "Shipki La", "Bara-lacha La"],
        "correct_answer": 0,
        "difficulty": "medium",
        "explanation": "Zoji La on the Srinagar-Leh highway links the Kashmir valley with Ladakh.",
        "tags": ["passes", "himalaya"],
    },
    {
        "topic": "Geography",
        "subtopic": "Physical Geography",
        "question": "Which of the following is a cold ocean current?",
        "options": ["Gulf Stream", "Kuroshio Current", "Canary Current", "Brazil Current"],
        "correct_answer": 2,
        "difficulty": "hard",
        "explanation": "The Canary Current flows south along north-west Africa and is a cold current.",
        "tags": ["ocean-currents"],
    },
    {
        "topic": "Geography",
        "subtopic": "World Geography",
        "question": "The 'Roaring Forties' are strong westerly winds found in which latitude band?",
        "options": ["40-50 degrees North", "40-50 degrees South", "30-40 degrees South", "50-60 degrees North"],
        "correct_answer": 1,
        "difficulty": "hard",
        "explanation": "The Roaring Forties blow between 40 and 50 degrees south, where little land interrupts them.",
        "tags": ["winds"],
    },
    # Polity
    {
        "topic": "Polity",
        "subtopic": "Constitution",
        "question": "Which Article of the Indian Constitution abolishes untouchability?",
        "options": ["Article 14", "Article 15", "Article 17", "Article 21"],
        "correct_answer": 2,
        "difficulty": "easy",
        "explanation": "Article 17 abolishes untouchability and forbids its practice in any form.",
        "tags": ["fundamental-rights"],
    },
    {
        "topic": "Polity",
        "subtopic": "Parliament",
        "question": "Who presides over a joint sitting of both Houses of Parliament?",
        "options": ["President", "Vice-President", "Speaker of the Lok Sabha", "Prime Minister"],
        "correct_answer": 2,
        "difficulty": "easy",
        "explanation": "The Speaker of the Lok Sabha presides over a joint sitting under Article 108.",
        "tags": ["parliament"],
    },
    {
        "topic": "Polity",
        "subtopic": "Constitution",
        "question": "The concept of Directive Principles of State Policy was borrowed from which country's constitution?",
        "options": ["USA", "Ireland", "Canada", "Australia"],
        "correct_answer": 1,
        "difficulty": "medium",
        "explanation": "The Directive Principles were adapted from the Irish Constitution of 1937.",
        "tags": ["dpsp", "sources"],
    },
    {
        "topic": "Polity",
        "subtopic": "Parliament",
        "question": "A Money Bill can be introduced only in which House, and on whose recommendation?",
        "options": [
            "Rajya Sabha, on the recommendation of the Finance Minister",
            "Lok Sabha, on the recommendation of the President",
            "Either House, on the recommendation of the Speaker",
            "Lok Sabha, on the recommendation of the Prime Minister",
        ],
        "correct_answer": 1,
        "difficulty": "medium",
        "explanation": "Article 117 requires a Money Bill to be introduced in the Lok Sabha on the President's recommendation.",
        "tags": ["money-bill"],
    },
    {
        "topic": "Polity",
        "subtopic": "Constitution",
        "question": "Which amendment introduced the anti-defection provisions as the Tenth Schedule?",
        "options": ["42nd Amendment", "44th Amendment", "52nd Amendment", "61st Amendment"],
        "correct_answer": 2,
        "difficulty": "hard",
        "explanation": "The 52nd Amendment Act, 1985 added the Tenth Schedule dealing with defection.",
        "tags": ["amendments", "anti-defection"],
        "pyq_year": 2017,
    },
    {
        "topic": "Polity",
        "subtopic": "Judiciary",
        "question": "In which case did the Supreme Court lay down the basic structure doctrine?",
        "options": ["Golaknath case", "Kesavananda Bharati case", "Minerva Mills case", "Maneka Gandhi case"],
        "correct_answer": 1,
        "difficulty": "hard",
        "explanation": "Kesavananda Bharati v. State of Kerala (1973) established the basic structure doctrine.",
        "tags": ["judiciary", "basic-structure"],
    },
    # Economy
    {
        "topic": "Economy",
        "subtopic": "Banking",
        "question": "Which institution is India's central bank?",
        "options": ["State Bank of India", "Reserve Bank of India", "NABARD", "SEBI"],
        "correct_answer": 1,
        "difficulty": "easy",
        "explanation": "The Reserve Bank of India, established in 1935, is the central bank.",
        "tags": ["banking", "rbi"],
    },
    {
        "topic": "Economy",
        "subtopic": "Fiscal Policy",
        "question": "Fiscal deficit is best described as the excess of total expenditure over what?",
        "options": [
            "Revenue receipts",
            "Total receipts excluding borrowings",
            "Capital receipts",
            "Tax revenue",
        ],
        "correct_answer": 1,
        "difficulty": "easy",
        "explanation": "Fiscal deficit equals total expenditure minus total receipts excluding borrowings.",
        "tags": ["budget", "deficit"],
    },
    {
        "topic": "Economy",
        "subtopic": "Banking",
        "question": "An increase in the Cash Reserve Ratio will most likely do what?",
        "options": [
            "Increase liquidity in the banking system",
            "Reduce the lending capacity of banks",
            "Lower the repo rate",
            "Increase government borrowing",
        ],
        "correct_answer": 1,
        "difficulty": "medium",
        "explanation": "A higher CRR locks more deposits with the RBI, leaving banks less to lend.",
        "tags": ["monetary-policy", "crr"],
    },
    {
        "topic": "Economy",
        "subtopic": "Fiscal Policy",
        "question": "Which of the following is a direct tax?",
        "options": ["GST", "Customs duty", "Corporation tax", "Excise duty"],
        "correct_answer": 2,
        "difficulty": "medium",
        "explanation": "Corporation tax is levied directly on company profits.",
        "tags": ["taxation"],
    },
    {
        "topic": "Economy",
        "subtopic": "External Sector",
        "question": "Which of these items is recorded in the capital account of the balance of payments?",
        "options": ["Export of software services", "Remittances from abroad", "Foreign direct investment", "Interest on external debt"],
        "correct_answer": 2,
        "difficulty": "hard",
        "explanation": "FDI is an asset transaction and belongs to the capital account; the others are current account items.",
        "tags": ["bop"],
        "pyq_year": 2020,
    },
    {
        "topic": "Economy",
        "subtopic": "Banking",
        "question": "The Marginal Standing Facility allows scheduled banks to borrow overnight from the RBI against what?",
        "options": [
            "Corporate bonds only",
            "Government securities, including those held under SLR",
            "Gold reserves",
            "Foreign currency deposits",
        ],
        "correct_answer": 1,
        "difficulty": "hard",
        "explanation": "Under MSF banks may dip into their SLR holdings of government securities up to a limit.",
        "tags": ["monetary-policy", "msf"],
    },
]


def get_dummy_questions() -> List[Question]:
    """Sample bank as validated Question objects"""
    return [Question(**data) for data in DUMMY_QUESTIONS]


def seed_questions(collection) -> int:
    """Insert the sample bank into an empty questions collection; returns inserted count"""
    existing = collection.count_documents({})
    if existing:
        logger.info(f"📚 Question bank already has {existing} questions, skipping seed")
        return 0

    documents = [question.to_document() for question in get_dummy_questions()]
    result = collection.insert_many(documents)
    logger.info(f"🔧 Seeded {len(result.inserted_ids)} sample questions")
    return len(result.inserted_ids)
