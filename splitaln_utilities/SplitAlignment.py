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

import array

from splitaln_utilities.utilities import escape


def strand_char(strand):
    return {-1: "-", 0: ".", 1: "+"}.get(strand, ".")


def gff3_line(seq_id, source, feature_type, start, end, score, strand, phase, attributes):
    """ Join the nine GFF3 columns. Missing values are written as '.' """
    return "\t".join([
        seq_id or ".",
        source or ".",
        feature_type or ".",
        str(start) if start else ".",
        str(end) if end else ".",
        str(score) if score is not None else ".",
        strand_char(strand),
        str(phase) if phase is not None else ".",
        attributes or ""
    ])


def value_list(values):
    """ Return tag values as a list. Array-valued (B type) tags give one item per element. """
    if values is None:
        return []
    if isinstance(values, (list, tuple, array.array)):
        return list(values)
    return [values]


def format_attributes(tags, name=None, parent_id=None, feature_id=None):
    """
    Format the GFF3 attribute column.
    :param tags: (key, values) pairs. Keys without values are left out.
    :param name: Value for the reserved 'Name' attribute
    :param parent_id: Value for the reserved 'Parent' attribute
    :param feature_id: Value for the reserved 'ID' attribute
    """
    result = []
    if name is not None:
        result.append("Name=" + escape(name))
    if parent_id is not None:
        result.append("Parent=" + escape(parent_id))
    if feature_id is not None:
        result.append("ID=" + escape(feature_id))

    for key, values in tags:
        values = value_list(values)
        if values:
            result.append(escape(key) + "=" + ",".join(escape(v) for v in values))

    return ";".join(result)


class Hit:
    """ The query coordinates of one part of a split alignment. """

    def __init__(self, in_name, in_start, in_end, in_strand, in_seq):
        self.name = in_name
        self.seq_id = in_name
        self.start = in_start
        self.end = in_end
        self.strand = in_strand
        self.seq = in_seq

    def __repr__(self):
        return "Hit(%s:%d-%d)" % (self.name, self.start, self.end)

    @property
    def length(self):
        return self.end - self.start + 1


class SplitAlignmentPart:
    """
    One contiguous block of a spliced alignment. Parts are always on the '+' strand and hold the reference
    coordinates and sequence of the block. The matching query coordinates and sequence are held by self.hit.
    """

    source = "sam/bam"

    def __init__(self, in_name, in_seq_id, in_start, in_end, in_strand, in_seq, in_type, in_hit, in_cigar_str):
        self.name = in_name
        self.seq_id = in_seq_id
        self.start = in_start
        self.end = in_end
        self.strand = in_strand
        self.seq = in_seq
        self.type = in_type
        self.hit = in_hit
        self.cigar_str = in_cigar_str

    def __repr__(self):
        return "SplitAlignmentPart(%s %s:%d-%d %s)" % (self.name, self.seq_id, self.start, self.end, self.cigar_str)

    @property
    def display_name(self):
        return self.name

    @property
    def length(self):
        return self.end - self.start + 1

    @property
    def low(self):
        return self.start

    @property
    def high(self):
        return self.end

    def dna(self):
        return self.seq

    def subseq(self, start, end):
        """ Return the reference sequence between 1-based feature coordinates, clamped to the feature. """
        start = max(start, 1)
        end = min(end, self.length)
        if end < start:
            return ""
        return self.seq[start-1:end]

    def get_SeqFeatures(self):
        return []

    def gff3_string(self, parent_id=None, part_id=None):
        """ Format this part as a single GFF3 line. """
        tags = []
        if self.hit is not None:
            tags.append(("Target", "%s %d %d %s" % (self.hit.name, self.hit.start, self.hit.end, strand_char(self.hit.strand))))
        attributes = format_attributes(tags, name=self.name, parent_id=parent_id, feature_id=part_id)
        return gff3_line(self.seq_id, self.source, self.type, self.start, self.end, None, self.strand, None, attributes)
