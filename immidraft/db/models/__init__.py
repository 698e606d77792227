"""Database models"""

from immidraft.db.models.case import Case
from immidraft.db.models.document import Document
from immidraft.db.models.order import Order
from immidraft.db.models.letter import Letter
from immidraft.db.models.evaluation_letter import EvaluationLetter
from immidraft.db.models.evaluation_letter_document import EvaluationLetterDocument
from immidraft.db.models.criterion import Criterion
from immidraft.db.models.translation_file import TranslationFile
from immidraft.db.models.evaluation_file import EvaluationFile

__all__ = [
    "Case",
    "Document",
    "Order",
    "Letter",
    "EvaluationLetter",
    "EvaluationLetterDocument",
    "Criterion",
    "TranslationFile",
    "EvaluationFile",
]
