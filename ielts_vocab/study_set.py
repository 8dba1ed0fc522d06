"""Built-in sample deck for trying the app before importing anything."""
from __future__ import annotations

from ielts_vocab.models import VocabularyEntry

STUDY_SET: list[VocabularyEntry] = [
    VocabularyEntry(
        id="1",
        term="Mitigate",
        translation="Giảm nhẹ",
        definition="To make something less severe, serious, or painful.",
        example="Flood barriers were built to mitigate the damage from storms.",
        level="7.5",
        collocations=("mitigate the effects", "mitigate the impact", "mitigate the risk"),
    ),
    VocabularyEntry(
        id="2",
        term="Ubiquitous",
        translation="Có mặt khắp nơi",
        definition="Present or found everywhere.",
        example="Smartphones have become ubiquitous in modern classrooms.",
        level="8.0",
        collocations=("nearly ubiquitous", "ubiquitous presence", "become ubiquitous"),
    ),
    VocabularyEntry(
        id="3",
        term="Adversity",
        translation="Nghịch cảnh",
        definition="A difficult or unpleasant situation.",
        example="The team stayed united in the face of adversity.",
        level="7.0",
        collocations=("overcome adversity", "face adversity", "economic adversity"),
    ),
    VocabularyEntry(
        id="4",
        term="Pragmatic",
        translation="Thực tế",
        definition="Dealing with things sensibly, based on practical considerations.",
        example="The council took a pragmatic approach to the housing shortage.",
        level="7.5",
        collocations=("pragmatic solution", "pragmatic approach", "be pragmatic about"),
    ),
    VocabularyEntry(
        id="5",
        term="Resilient",
        translation="Kiên cường",
        definition="Able to recover quickly from difficult conditions.",
        example="Local businesses proved remarkably resilient after the recession.",
        level="7.0",
        collocations=("highly resilient", "resilient economy", "remain resilient"),
    ),
    VocabularyEntry(
        id="6",
        term="Scrutinize",
        translation="Xem xét kỹ lưỡng",
        definition="To examine or inspect closely and thoroughly.",
        example="Auditors scrutinize every expense claim before approval.",
        level="7.5",
        collocations=("scrutinize the details", "closely scrutinize", "publicly scrutinized"),
    ),
    VocabularyEntry(
        id="7",
        term="Ambiguous",
        translation="Mơ hồ",
        definition="Open to more than one interpretation.",
        example="The final clause of the contract is deliberately ambiguous.",
        level="6.5",
        collocations=("highly ambiguous", "ambiguous wording", "remain ambiguous"),
    ),
    VocabularyEntry(
        id="8",
        term="Conducive",
        translation="Có lợi cho",
        definition="Making a certain situation or outcome likely or possible.",
        example="A quiet library is conducive to concentrated study.",
        level="7.5",
        collocations=("conducive to learning", "conducive to growth", "conducive environment"),
    ),
    VocabularyEntry(
        id="9",
        term="Detrimental",
        translation="Có hại",
        definition="Tending to cause harm.",
        example="Lack of sleep has a detrimental effect on memory.",
        level="6.5",
        collocations=("detrimental effect", "detrimental impact", "highly detrimental"),
    ),
    VocabularyEntry(
        id="10",
        term="Exemplify",
        translation="Minh họa",
        definition="To be a typical example of something.",
        example="These buildings exemplify the city's colonial architecture.",
        level="7.0",
        collocations=("exemplify the trend", "clearly exemplify", "best exemplified by"),
    ),
]
