"""Bitap approximate string matching.

Scores one search pattern against one piece of text the way Fuse.js does, so
that ranking order is reproducible: 0.0 is a perfect match, 1.0 no match.
"""

import sys

MAX_BITS = 32
MIN_SCORE = 0.001
EPSILON = sys.float_info.epsilon


def create_pattern_alphabet(pattern: str) -> dict[str, int]:
    """Map each pattern character to a bitmask of its positions.

    The last pattern character is bit 0.
    """
    alphabet: dict[str, int] = {}
    length = len(pattern)
    for i, char in enumerate(pattern):
        alphabet[char] = alphabet.get(char, 0) | (1 << (length - i - 1))
    return alphabet


def compute_score(
    pattern: str,
    errors: int = 0,
    current_location: int = 0,
    expected_location: int = 0,
    distance: int = 100,
    ignore_location: bool = False,
) -> float:
    """Score a candidate: error fraction plus proximity penalty."""
    accuracy = errors / len(pattern)
    if ignore_location:
        return accuracy

    proximity = abs(expected_location - current_location)
    if not distance:
        return 1.0 if proximity else accuracy
    return accuracy + proximity / distance


def mask_to_indices(match_mask: list[int], min_match_char_length: int = 1) -> list[tuple[int, int]]:
    """Collapse a per-character hit mask into (start, end) runs of sufficient length."""
    indices = []
    start = -1
    for i, hit in enumerate(match_mask):
        if hit and start == -1:
            start = i
        elif not hit and start != -1:
            if i - start >= min_match_char_length:
                indices.append((start, i - 1))
            start = -1

    end = len(match_mask)
    if start != -1 and end - start >= min_match_char_length:
        indices.append((start, end - 1))
    return indices


def _mark(match_mask: list[int], index: int, value: int) -> None:
    if index >= len(match_mask):
        match_mask.extend([0] * (index + 1 - len(match_mask)))
    match_mask[index] = value


def bitap_search(
    text: str,
    pattern: str,
    alphabet: dict[str, int],
    location: int = 0,
    distance: int = 100,
    threshold: float = 0.6,
    min_match_char_length: int = 1,
    ignore_location: bool = False,
    find_all_matches: bool = False,
) -> tuple[bool, float]:
    """Search for a (<= 32 char) pattern inside text allowing errors.

    Returns (is_match, score).
    """
    if len(pattern) > MAX_BITS:
        raise ValueError(f"Pattern length exceeds max of {MAX_BITS}")

    pattern_len = len(pattern)
    text_len = len(text)
    expected_location = max(0, min(location, text_len))
    scoring = {
        "distance": distance,
        "expected_location": expected_location,
        "ignore_location": ignore_location,
    }

    current_threshold = threshold
    best_location = expected_location
    compute_matches = min_match_char_length > 1
    match_mask = [0] * text_len if compute_matches else []

    # Exact occurrences first: they cap the threshold for the fuzzy pass
    index = text.find(pattern, best_location)
    while index > -1:
        score = compute_score(pattern, current_location=index, **scoring)
        current_threshold = min(score, current_threshold)
        best_location = index + pattern_len
        if compute_matches:
            for i in range(pattern_len):
                match_mask[index + i] = 1
        index = text.find(pattern, best_location)

    best_location = -1
    last_bits: list[int] = []
    final_score = 1.0
    bin_max = pattern_len + text_len
    mask = 1 << (pattern_len - 1)

    for i in range(pattern_len):
        # Widest window around the expected location that can still score under the threshold
        bin_min = 0
        bin_mid = bin_max
        while bin_min < bin_mid:
            score = compute_score(
                pattern, errors=i, current_location=expected_location + bin_mid, **scoring
            )
            if score <= current_threshold:
                bin_min = bin_mid
            else:
                bin_max = bin_mid
            bin_mid = (bin_max - bin_min) // 2 + bin_min
        bin_max = bin_mid

        start = max(1, expected_location - bin_mid + 1)
        if find_all_matches:
            finish = text_len
        else:
            finish = min(expected_location + bin_mid, text_len) + pattern_len

        bits = [0] * (finish + 2)
        bits[finish + 1] = (1 << i) - 1

        j = finish
        while j >= start:
            current_location = j - 1
            char = text[current_location] if current_location < text_len else ""
            char_match = alphabet.get(char, 0)
            if compute_matches:
                _mark(match_mask, current_location, 1 if char_match else 0)

            bits[j] = ((bits[j + 1] << 1) | 1) & char_match
            if i:
                prev_next = last_bits[j + 1] if j + 1 < len(last_bits) else 0
                prev_here = last_bits[j] if j < len(last_bits) else 0
                bits[j] |= ((prev_next | prev_here) << 1) | 1 | prev_next

            if bits[j] & mask:
                final_score = compute_score(
                    pattern, errors=i, current_location=current_location, **scoring
                )
                if final_score <= current_threshold:
                    current_threshold = final_score
                    best_location = current_location
                    if best_location <= expected_location:
                        break
                    start = max(1, 2 * expected_location - best_location)
            j -= 1

        # No hope for a better match with one more error
        score = compute_score(
            pattern, errors=i + 1, current_location=expected_location, **scoring
        )
        if score > current_threshold:
            break
        last_bits = bits

    is_match = best_location >= 0
    if compute_matches and not mask_to_indices(match_mask, min_match_char_length):
        is_match = False
    return is_match, max(MIN_SCORE, final_score)


class BitapSearcher:
    """Reusable searcher for one query pattern.

    Patterns longer than MAX_BITS are split into chunks; the last chunk
    overlaps so it is always a full MAX_BITS characters.
    """

    def __init__(
        self,
        pattern: str,
        threshold: float = 0.6,
        distance: int = 100,
        location: int = 0,
        min_match_char_length: int = 1,
        ignore_location: bool = False,
        find_all_matches: bool = False,
    ):
        self.pattern = pattern.lower()
        self.options = {
            "threshold": threshold,
            "distance": distance,
            "min_match_char_length": min_match_char_length,
            "ignore_location": ignore_location,
            "find_all_matches": find_all_matches,
        }
        self.location = location
        self.chunks: list[tuple[str, dict[str, int], int]] = []
        if not self.pattern:
            return

        length = len(self.pattern)
        if length <= MAX_BITS:
            self._add_chunk(self.pattern, 0)
            return

        remainder = length % MAX_BITS
        end = length - remainder
        for i in range(0, end, MAX_BITS):
            self._add_chunk(self.pattern[i:i + MAX_BITS], i)
        if remainder:
            start_index = length - MAX_BITS
            self._add_chunk(self.pattern[start_index:], start_index)

    def _add_chunk(self, pattern: str, start_index: int) -> None:
        self.chunks.append((pattern, create_pattern_alphabet(pattern), start_index))

    def search_in(self, text: str) -> tuple[bool, float]:
        """Score text against the pattern. Returns (is_match, score)."""
        text = text.lower()
        if self.pattern == text:
            return True, 0.0
        if not self.chunks:
            return False, 1.0

        total_score = 0.0
        has_matches = False
        for pattern, alphabet, start_index in self.chunks:
            is_match, score = bitap_search(
                text,
                pattern,
                alphabet,
                location=self.location + start_index,
                **self.options,
            )
            if is_match:
                has_matches = True
            total_score += score

        if not has_matches:
            return False, 1.0
        return True, total_score / len(self.chunks)
