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

from splitaln_utilities.AlignWrapper import AlignWrapper, BamAlignment
from splitaln_utilities.ReferenceFetcher import ReferenceFetcher
from splitaln_utilities.ReferenceRegion import ReferenceRegion
from splitaln_utilities.utilities import log, parse_region


class SAMReader:
    """
    Read alignments from a SAM, BAM or CRAM file and wrap them as AlignWrapper objects.

    The reader holds the settings shared by all of the alignments it produces:

        1. split_splices: split alignments at skip ('N') operations
        2. expand_flags: resolve tags with every SAM flag as its own tag, rather than one 'FLAGS' tag
        3. cumulative_skips: add up skip lengths when placing split parts (see SplitSegmenter.split_splices)

    Reference sequence comes from an optional FASTA file. Without one, reference sequence is reported as 'N's.
    """

    def __init__(self, in_aln_file, in_fasta_file=None, in_split_splices=True, in_expand_flags=False, in_cumulative_skips=False):
        self.aln_file = in_aln_file
        self.split_splices = in_split_splices
        self.expand_flags = in_expand_flags
        self.cumulative_skips = in_cumulative_skips

        if not os.path.isfile(self.aln_file):
            raise ValueError("Could not find the alignment file: %s" % self.aln_file)

        self._aln = pysam.AlignmentFile(self.aln_file)
        self.fetcher = ReferenceFetcher(in_fasta_file)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def target_name(self, tid):
        """ Return the reference sequence name for a reference ID, or None for unplaced records. """
        if tid is None or tid < 0:
            return None
        return self._aln.get_reference_name(tid)

    def get_reference_length(self, seq_id):
        return self._aln.get_reference_length(seq_id)

    def _wrap(self, records, include_unmapped):
        skipped = 0
        for record in records:
            if record.is_unmapped and not include_unmapped:
                skipped += 1
                continue
            yield AlignWrapper(BamAlignment(record), self)

        if skipped:
            log("INFO", "Skipped %d unmapped alignments in %s" % (skipped, self.aln_file))

    def features(self, seq_id, start=None, end=None, include_unmapped=False):
        """
        Generator yielding the wrapped alignments overlapping a reference interval. Requires an indexed file.
        :param seq_id: Reference sequence name
        :param start: 1-based start position
        :param end: 1-based, inclusive end position
        """
        zstart = start - 1 if start is not None else None
        return self._wrap(self._aln.fetch(seq_id, zstart, end), include_unmapped)

    def parse_alignments(self, region=None, include_unmapped=False):
        """ Generator yielding wrapped alignments, optionally restricted to a 'ctg:start-end' region. """
        if region:
            seq_id, start, end = parse_region(region)
            return self.features(seq_id, start, end, include_unmapped)

        return self._wrap(self._aln.fetch(until_eof=True), include_unmapped)

    def region(self, seq_id, start=None, end=None):
        """ Return a ReferenceRegion. The region covers the whole reference sequence by default. """
        if start is None:
            start = 1
        if end is None:
            end = self.get_reference_length(seq_id)
        return ReferenceRegion(self, seq_id, start, end)

    def close(self):
        self._aln.close()
        self.fetcher.close()
