from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Protocol

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.core.errors import ClassifierUnavailable
from resume_scorer.normalize.text import Sentence
from resume_scorer.schemas.facts import CandidateFact

logger = logging.getLogger(__name__)

_PLACE_LABELS = {"GPE", "LOC", "FAC"}


@dataclass(frozen=True, slots=True)
class EntitySpans:
    people: tuple[str, ...] = ()
    places: tuple[str, ...] = ()
    organizations: tuple[str, ...] = ()


class EntityClassifier(Protocol):
    def is_available(self) -> bool:
        """Whether the backing model is loaded and usable."""

    def classify_entities(self, sentence: str) -> EntitySpans:
        """Return the named entities found in one sentence."""


class SpacyEntityClassifier:
    """Entity classifier backed by a spaCy pipeline (``pip install resume-scorer[nlp]``)."""

    def __init__(self, model_name: str = "zh_core_web_sm") -> None:
        try:
            import spacy
        except ImportError as exc:
            raise ClassifierUnavailable("spaCy is not installed; install the 'nlp' extra.") from exc
        try:
            self._nlp = spacy.load(model_name)
        except OSError as exc:
            raise ClassifierUnavailable(
                f"spaCy model '{model_name}' is not installed. "
                f"Install with: python -m spacy download {model_name}"
            ) from exc
        self.model_name = model_name

    def is_available(self) -> bool:
        return self._nlp is not None

    def classify_entities(self, sentence: str) -> EntitySpans:
        doc = self._nlp(sentence)
        people: list[str] = []
        places: list[str] = []
        organizations: list[str] = []
        for ent in doc.ents:
            text = ent.text.strip()
            if not text:
                continue
            if ent.label_ == "PERSON":
                people.append(text)
            elif ent.label_ in _PLACE_LABELS:
                places.append(text)
            elif ent.label_ == "ORG":
                organizations.append(text)
        return EntitySpans(tuple(people), tuple(places), tuple(organizations))


def build_entity_classifier(model_name: str) -> EntityClassifier | None:
    try:
        classifier = SpacyEntityClassifier(model_name)
    except ClassifierUnavailable as exc:
        logger.warning("entity_classifier_unavailable model=%s reason=%s", model_name, exc)
        return None
    logger.info("entity_classifier_loaded model=%s", model_name)
    return classifier


def entities_to_facts(
    spans: EntitySpans,
    sentence: Sentence,
    rulebook: RuleBook,
) -> list[CandidateFact]:
    cfg = rulebook.value("extraction.semantic_confidence", {})
    school_marker = rulebook.marker("school_entity")
    facts: list[CandidateFact] = []

    def emit(category: str, subcategory: str, text: str, confidence: float) -> None:
        facts.append(
            CandidateFact(
                category=category,
                subcategory=subcategory,
                raw_text=text,
                confidence=confidence,
                method="semantic",
                source_position=sentence.start,
                source_span=sentence.text,
            )
        )

    for person in spans.people:
        if int(cfg["person_min_chars"]) <= len(person) <= int(cfg["person_max_chars"]):
            emit("personal", "name", person, float(cfg["person"]))
    for place in spans.places:
        if len(place) >= int(cfg["place_min_chars"]):
            emit("personal", "address", place, float(cfg["place"]))
    for org in spans.organizations:
        if school_marker.search(org):
            emit("education", "school", org, float(cfg["school"]))
        else:
            emit("experience", "work", org, float(cfg["organization"]))
    return facts


def _classify_all(
    classifier: EntityClassifier,
    sentences: list[Sentence],
    rulebook: RuleBook,
    stop: threading.Event,
) -> list[CandidateFact]:
    facts: list[CandidateFact] = []
    for sentence in sentences:
        if stop.is_set():
            break
        facts.extend(entities_to_facts(classifier.classify_entities(sentence.text), sentence, rulebook))
    return facts


def run_semantic_pass(
    classifier: EntityClassifier | None,
    sentences: list[Sentence],
    rulebook: RuleBook,
    *,
    timeout_seconds: float,
) -> tuple[list[CandidateFact], bool]:
    """Run the optional classifier under a deadline.

    Returns the facts and whether the pass completed. Timeouts, an
    unavailable model and classifier errors all yield ``([], False)``.
    """
    if classifier is None or not sentences:
        return [], False
    try:
        if not classifier.is_available():
            return [], False
    except ClassifierUnavailable as exc:
        logger.info("semantic_pass_skipped reason=%s", exc)
        return [], False

    stop = threading.Event()
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="semantic-pass")
    future = executor.submit(_classify_all, classifier, sentences, rulebook, stop)
    try:
        facts = future.result(timeout=timeout_seconds)
    except FutureTimeoutError:
        stop.set()
        logger.warning("semantic_pass_timeout timeout_seconds=%s sentences=%s", timeout_seconds, len(sentences))
        return [], False
    except ClassifierUnavailable as exc:
        logger.info("semantic_pass_skipped reason=%s", exc)
        return [], False
    except Exception as exc:
        logger.warning("semantic_pass_failed: %s", exc)
        return [], False
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    logger.debug("semantic_pass_complete facts=%s", len(facts))
    return facts, True
