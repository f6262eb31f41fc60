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

from splitaln_utilities.CigarOps import CigarOp, SKIP_OP, model_length, ops_str
from splitaln_utilities.SplitAlignment import Hit, SplitAlignmentPart
from splitaln_utilities.ReferenceFetcher import NoSequenceBackendError
from splitaln_utilities.utilities import unknown_bases


def split_splices(cigar, ref_start, strand, query_seq=None, ref_seq=None, name=None, seq_id=None, feature_type="match", cumulative_skips=False):
    """
    Split an alignment at its skip ('N') operations.

    The operations are scanned once, left to right, with a zero length skip appended so that the trailing block
    is always emitted. Every skip closes the current block into a SplitAlignmentPart (reference coordinates) and
    its Hit (query coordinates). Block-consuming operations (M, D, S, H, P) all advance the same running offset.
    Skips do not advance it because they do not consume query sequence. Instead, the length of the most recent
    skip is added to the reference coordinates of the next part.

    By default, each skip replaces the previous skip length rather than adding to it. This is correct
    for alignments with a single skip, but with two or more skips the third and later parts are placed
    without the lengths of the earlier skips. Set cumulative_skips to sum all skip lengths instead.

    :param cigar: List of CigarOp objects
    :param ref_start: 1-based reference start of the alignment
    :param strand: Strand of the alignment (1 or -1). Assigned to each Hit.
    :param query_seq: Query sequence, or None
    :param ref_seq: Reference sequence starting at ref_start, or None
    :param name: Alignment (query) name
    :param seq_id: Reference sequence name
    :param feature_type: Feature type given to each part
    :param cumulative_skips: Sum skip lengths instead of keeping only the most recent one
    :return: List of SplitAlignmentPart objects, one per block, in alignment order
    """
    # Missing sequence is replaced with 'N's, long enough for any slice taken below
    aln_len = model_length(cigar)
    if not query_seq:
        query_seq = unknown_bases(aln_len)
    if ref_seq is None:
        ref_seq = unknown_bases(aln_len)

    parts = []
    start = 0
    end = 0
    skip = 0
    partial_cigar = []

    for op in list(cigar) + [CigarOp(SKIP_OP, 0)]:
        if op.is_skip:
            s = ref_start + start + skip
            e = ref_start + end - 1 + skip

            hit = Hit(name, start + 1, end, strand, query_seq[start:end])
            parts.append(SplitAlignmentPart(
                name,
                seq_id,
                s,
                e,
                1,
                ref_seq[start+skip:end+skip],
                feature_type,
                hit,
                ops_str(partial_cigar)
            ))
            partial_cigar = []
            start = end
        else:
            partial_cigar.append(op)

        if op.is_block:
            end += op.count

        if op.is_skip:
            skip = skip + op.count if cumulative_skips else op.count

    return parts


class SplitSegmenter:
    """
    Split alignments at skip operations, fetching reference sequence for the parts from a ReferenceFetcher.

    Without a fetcher, or with a fetcher that has no sequence backend, reference sequence is replaced with 'N's.
    """

    def __init__(self, in_fetcher=None, in_cumulative_skips=False):
        self.fetcher = in_fetcher
        self.cumulative_skips = in_cumulative_skips

    def _fetch_ref_seq(self, seq_id, ref_start, aln_len):
        if self.fetcher is None or seq_id is None:
            return None

        try:
            return self.fetcher.fetch(seq_id, ref_start, ref_start + aln_len - 1)
        except NoSequenceBackendError:
            return None

    def segment(self, cigar, ref_start, strand, query_seq=None, name=None, seq_id=None, feature_type="match"):
        """ Split one alignment. See split_splices() for the arguments and the coordinate arithmetic. """
        ref_seq = self._fetch_ref_seq(seq_id, ref_start, model_length(cigar))
        return split_splices(
            cigar,
            ref_start,
            strand,
            query_seq=query_seq,
            ref_seq=ref_seq,
            name=name,
            seq_id=seq_id,
            feature_type=feature_type,
            cumulative_skips=self.cumulative_skips
        )
