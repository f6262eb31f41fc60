from pytest import raises

from conftest import REF_SEQ
from splitaln_utilities.ReferenceFetcher import ReferenceFetcher, NoSequenceBackendError, MissingReferenceError


def test_fetch(fasta_file):
    with ReferenceFetcher(fasta_file) as fetcher:
        assert fetcher.has_backend
        assert fetcher.fetch("chr1", 1, 10) == REF_SEQ[0:10]
        assert fetcher.fetch("chr1", 1001, 1060) == REF_SEQ[1000:1060]
        assert fetcher.get_reference_length("chr1") == len(REF_SEQ)


def test_fetch_past_end(fasta_file):
    with ReferenceFetcher(fasta_file) as fetcher:
        assert fetcher.fetch("chr1", len(REF_SEQ) - 4, len(REF_SEQ) + 100) == REF_SEQ[-5:]
        assert fetcher.fetch("chr1", 20, 19) == ""


def test_missing_sequence(fasta_file):
    with ReferenceFetcher(fasta_file) as fetcher:
        with raises(MissingReferenceError):
            fetcher.fetch("chr2", 1, 10)
        with raises(NoSequenceBackendError):
            fetcher.get_reference_length("chr2")


def test_no_backend():
    fetcher = ReferenceFetcher()
    assert not fetcher.has_backend
    with raises(NoSequenceBackendError):
        fetcher.fetch("chr1", 1, 10)
    fetcher.close()


def test_missing_file(tmp_path):
    with raises(ValueError):
        ReferenceFetcher(str(tmp_path / "missing.fa"))
