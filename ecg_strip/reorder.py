"""Reorder incoming leads into the clinical 12-lead order"""
from typing import List, Sequence, Tuple, TypeVar

import numpy as np

from .constants import CLINICAL_LEAD_ORDER
from .models import RearrangedLeadSet, WaveformBuffer

T = TypeVar('T')


def canonical_indices(canonical_order: Sequence[str], input_labels: Sequence[str]) -> List[Tuple[str, int]]:
    """
    Match input labels against the canonical order.

    Args:
        canonical_order: Lead names in the order they should appear
        input_labels: Labels as supplied, matched case-insensitively

    Returns:
        List of (canonical name, index into input_labels), in canonical order.
        A label repeated in the input resolves to its first occurrence.
    """
    upper_labels = [label.upper() for label in input_labels]
    matches = []
    for name in canonical_order:
        if name in upper_labels:
            matches.append((name, upper_labels.index(name)))
    return matches


def reorder(canonical_order: Sequence[str], input_labels: Sequence[str],
            input_data: Sequence[T]) -> Tuple[List[str], List[T]]:
    """Return the matched lead names and their data, both in canonical order"""
    matches = canonical_indices(canonical_order, input_labels)
    return [name for name, _ in matches], [input_data[i] for _, i in matches]


def rearrange_buffer(waveform: WaveformBuffer) -> RearrangedLeadSet:
    """
    Reorder a waveform buffer into clinical lead order.

    Channels whose label is not a clinical lead are dropped. Each lead keeps
    its own sample rate.
    """
    waveform.validate()
    matches = canonical_indices(CLINICAL_LEAD_ORDER, waveform.labels)
    return RearrangedLeadSet(
        names=[name for name, _ in matches],
        samples=[np.asarray(waveform.buffer[i], dtype=float) for _, i in matches],
        sample_rates=[float(waveform.channels[i].sample_rate) for _, i in matches],
    )
