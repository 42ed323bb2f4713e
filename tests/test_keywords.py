# =============================================
# File: tests/test_keywords.py
# Purpose: Keyword extraction and synonym expansion
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from hummbl_api.utils.keywords import extract_keywords
from hummbl_api.utils.synonyms import expand_with_synonyms


# ---------- extraction ----------

def test_empty_and_blank_inputs():
    assert extract_keywords("") == []
    assert extract_keywords("   \n\t ") == []


def test_drops_stopwords_and_short_tokens():
    assert extract_keywords("The quick brown fox", apply_stemming=False) == ["quick", "brown", "fox"]
    assert extract_keywords("I need to do this and that") == []


def test_punctuation_becomes_whitespace_but_hyphens_stay():
    out = extract_keywords("Hello, World! It's a test-case 42", apply_stemming=False)
    assert out == ["hello", "world", "test-case"]


def test_keeps_duplicates_and_order():
    assert extract_keywords("teams teams", apply_stemming=True) == ["team", "team"]


def test_stemming_applied():
    assert extract_keywords("breaking complex problems") == ["break", "complex", "problem"]


def test_max_tokens_keeps_prefix():
    out = extract_keywords("alpha beta gamma delta", apply_stemming=False, max_tokens=2)
    assert out == ["alpha", "beta"]


def test_non_ascii_does_not_raise():
    out = extract_keywords("café naïve 💡 résumé", apply_stemming=False)
    assert out == ["caf", "sum"]


# ---------- synonyms ----------

def test_base_term_pulls_family_stemmed():
    assert expand_with_synonyms(["team"]) == ["team", "group", "crew", "squad", "staff", "colleague"]


def test_synonym_as_written_pulls_family():
    out = expand_with_synonyms(["blocked"])
    assert out[0] == "blocked"
    assert "stuck" in out
    assert "gridlock" in out


def test_stemmed_keyword_misses_unstemmed_table_entry():
    # "improving" stems to "improv", which is neither "improve" nor one of its synonyms
    assert extract_keywords("improving") == ["improv"]
    assert expand_with_synonyms(["improv"]) == ["improv"]
    assert expand_with_synonyms(["improve"]) == ["improve", "enhance", "bett", "upgrade", "optimize", "refine"]


def test_unknown_keyword_passes_through():
    assert expand_with_synonyms(["xyzzy"]) == ["xyzzy"]
    assert expand_with_synonyms([]) == []


def test_deduplicates_keeping_first_occurrence():
    out = expand_with_synonyms(["team", "team", "crew"])
    assert out.count("team") == 1
    assert out.count("crew") == 1
    assert out[0] == "team"
