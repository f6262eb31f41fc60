#!/usr/bin/env python

"""
MIT License

Copyright (c) 2020 Michael Alonge <malonge11@gmail.com>

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

import os

import pysam


class NoSequenceBackendError(Exception):
    """ Raised when reference sequence is requested but no FASTA file was configured. """
    pass


class MissingReferenceError(NoSequenceBackendError):
    """ Raised when the FASTA file has no sequence with the requested name. """
    pass


class ReferenceFetcher:
    """
    Retrieve reference sequence from an indexed (uncompressed or bgzipped) FASTA file.

    A fetcher may be created without a FASTA file. In that case it has no sequence backend and every fetch raises
    NoSequenceBackendError, letting callers decide how to substitute missing sequence. Sequence names missing from the
    FASTA file raise MissingReferenceError, a subclass of NoSequenceBackendError.
    """

    def __init__(self, in_fasta_file=None):
        self.fasta_file = in_fasta_file
        self._fai = None

        if self.fasta_file is not None:
            if not os.path.isfile(self.fasta_file):
                raise ValueError("Could not find the reference FASTA file: %s" % self.fasta_file)
            self._fai = pysam.FastaFile(self.fasta_file)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def has_backend(self):
        return self._fai is not None

    def fetch(self, seq_id, start, end):
        """
        Fetch reference sequence.
        :param seq_id: Reference sequence name
        :param start: 1-based start position
        :param end: 1-based, inclusive end position. Ranges past the end of the sequence are truncated.
        :return: The sequence as a string
        """
        if self._fai is None:
            raise NoSequenceBackendError("No reference FASTA file was provided")

        if seq_id not in self._fai.references:
            raise MissingReferenceError("Sequence %s is not in the reference FASTA file" % seq_id)

        if end < start:
            return ""

        return self._fai.fetch(seq_id, max(start - 1, 0), end)

    def get_reference_length(self, seq_id):
        if self._fai is None:
            raise NoSequenceBackendError("No reference FASTA file was provided")
        if seq_id not in self._fai.references:
            raise MissingReferenceError("Sequence %s is not in the reference FASTA file" % seq_id)
        return self._fai.get_reference_length(seq_id)

    def close(self):
        if self._fai is not None:
            self._fai.close()
            self._fai = None
