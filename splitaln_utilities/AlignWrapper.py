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

import abc

from splitaln_utilities.CigarOps import from_cigartuples, to_cigar_str
from splitaln_utilities.ReferenceFetcher import NoSequenceBackendError
from splitaln_utilities.SplitAlignment import gff3_line, format_attributes
from splitaln_utilities.SplitSegmenter import SplitSegmenter
from splitaln_utilities.utilities import unknown_bases

# SAM bit flags, in bit order
FLAGS = [
    ("PAIRED", 0x1),
    ("MAP_PAIR", 0x2),
    ("UNMAPPED", 0x4),
    ("M_UNMAPPED", 0x8),
    ("REVERSED", 0x10),
    ("M_REVERSED", 0x20),
    ("FIRST_MATE", 0x40),
    ("SECOND_MATE", 0x80),
    ("NOT_PRIMARY", 0x100),
    ("QC_FAILED", 0x200),
    ("DUPLICATE", 0x400),
    ("SUPPLEMENTARY", 0x800),
]
FLAG_VALUES = dict(FLAGS)


def flag_str(flag):
    """ Format SAM bit flags as '|' separated flag names, e.g. 'PAIRED|REVERSED'. """
    return "|".join(name for name, value in FLAGS if flag & value)


class Alignment(metaclass=abc.ABCMeta):
    """
    The accessors an alignment record must provide to be wrapped by an AlignWrapper.

    Coordinates are 1-based and inclusive. The record's native tag table exposes every SAM flag as its own tag
    along with the auxiliary fields.
    """

    @property
    @abc.abstractmethod
    def cigar(self):
        """ List of CigarOp objects. """
        pass

    @property
    @abc.abstractmethod
    def start(self):
        pass

    @property
    @abc.abstractmethod
    def end(self):
        pass

    @property
    @abc.abstractmethod
    def strand(self):
        pass

    @property
    @abc.abstractmethod
    def qname(self):
        pass

    @property
    @abc.abstractmethod
    def tid(self):
        pass

    @property
    @abc.abstractmethod
    def qseq(self):
        """ The query sequence, or None if it is not stored. """
        pass

    @property
    @abc.abstractmethod
    def qual(self):
        """ Mapping quality. """
        pass

    @property
    @abc.abstractmethod
    def flag(self):
        pass

    @abc.abstractmethod
    def aux_keys(self):
        pass

    @abc.abstractmethod
    def aux_get(self, tag):
        pass

    def flag_str(self):
        return flag_str(self.flag)

    def get_all_tags(self):
        return self.aux_keys() + [name for name, value in FLAGS]

    def get_tag_values(self, tag):
        if tag in FLAG_VALUES:
            return 1 if self.flag & FLAG_VALUES[tag] else 0
        return self.aux_get(tag)

    def has_tag(self, tag):
        return tag in FLAG_VALUES or tag in self.aux_keys()


class BamAlignment(Alignment):
    """ Alignment interface for a pysam.AlignedSegment. """

    def __init__(self, in_segment):
        self.segment = in_segment

    @property
    def cigar(self):
        return from_cigartuples(self.segment.cigartuples)

    @property
    def start(self):
        return self.segment.reference_start + 1

    @property
    def end(self):
        # pysam ends are 0-based and exclusive
        if self.segment.reference_end is None:
            return self.start
        return self.segment.reference_end

    @property
    def strand(self):
        return -1 if self.segment.is_reverse else 1

    @property
    def qname(self):
        return self.segment.query_name

    @property
    def tid(self):
        return self.segment.reference_id

    @property
    def qseq(self):
        return self.segment.query_sequence

    @property
    def qual(self):
        return self.segment.mapping_quality

    @property
    def flag(self):
        return self.segment.flag

    def aux_keys(self):
        return [tag for tag, value in self.segment.get_tags()]

    def aux_get(self, tag):
        if not self.segment.has_tag(tag):
            return None
        return self.segment.get_tag(tag)


class AlignWrapper:
    """
    An alignment feature built from an Alignment record and the SAMReader that produced it.

    If the reader splits splices and the alignment has a skip ('N') operation, the alignment is split into
    SplitAlignmentPart sub-features at construction. Those are returned by get_SeqFeatures().

    Tags are resolved in one of two modes, chosen by reader.expand_flags at the time of each call:

        1. Expanded: tags come straight from the record. Every SAM flag is its own tag.
        2. Compact: tags are the auxiliary fields plus a single 'FLAGS' tag holding all flag names.
    """

    source = "sam/bam"
    type = "match"
    method = "match"

    def __init__(self, in_align, in_reader):
        self.align = in_align
        self.reader = in_reader
        self.segments = []

        if self.reader.split_splices and any(op.is_skip for op in self.cigar):
            self.add_segment(*self.split_splices())

    def __repr__(self):
        return "AlignWrapper(%s %s:%d-%d %s)" % (self.name, self.seq_id, self.start, self.end, self.cigar_str)

    # Accessors for the wrapped alignment
    @property
    def cigar(self):
        return self.align.cigar

    @property
    def cigar_str(self):
        return to_cigar_str(self.cigar)

    @property
    def start(self):
        return self.align.start

    @property
    def end(self):
        return self.align.end

    @property
    def low(self):
        return self.start

    @property
    def high(self):
        return self.end

    @property
    def length(self):
        return self.end - self.start + 1

    @property
    def strand(self):
        return self.align.strand

    @property
    def name(self):
        return self.align.qname

    @property
    def display_name(self):
        return self.align.qname

    @property
    def qseq(self):
        return self.align.qseq

    @property
    def score(self):
        return self.align.qual

    @property
    def flag(self):
        return self.align.flag

    @property
    def seq_id(self):
        return self.reader.target_name(self.align.tid)

    @property
    def primary_id(self):
        return "%s:%s:%d" % (self.name, self.seq_id, self.start)

    def flag_str(self):
        return self.align.flag_str()

    def aux_keys(self):
        return self.align.aux_keys()

    def aux_get(self, tag):
        return self.align.aux_get(tag)

    # Split alignments
    def add_segment(self, *parts):
        self.segments.extend(parts)

    def get_SeqFeatures(self):
        return list(self.segments)

    def split_splices(self):
        """ Split this alignment at its skip operations. Returns a list of SplitAlignmentPart objects. """
        segmenter = SplitSegmenter(self.reader.fetcher, self.reader.cumulative_skips)
        return segmenter.segment(
            self.cigar,
            self.start,
            self.strand,
            query_seq=self.qseq,
            name=self.display_name,
            seq_id=self.seq_id,
            feature_type=self.type
        )

    # Reference sequence
    def dna(self):
        """ The reference sequence under the alignment, or 'N's when no reference FASTA is available. """
        try:
            return self.reader.fetcher.fetch(self.seq_id, self.start, self.end)
        except NoSequenceBackendError:
            return unknown_bases(self.length)

    def subseq(self, start, end):
        """ Return the reference sequence between 1-based alignment coordinates, clamped to the alignment. """
        start = max(start, 1)
        end = min(end, self.length)
        if end < start:
            return ""
        return self.dna()[start-1:end]

    # Tags
    @property
    def expand_flags(self):
        return self.reader.expand_flags

    def get_all_tags(self):
        if self.expand_flags:
            return self.align.get_all_tags()
        return self.aux_keys() + ["FLAGS"]

    def get_tag_values(self, tag):
        if tag is None:
            return None

        if self.expand_flags:
            return self.align.get_tag_values(tag)

        if tag == "FLAGS":
            return self.flag_str()
        return self.aux_get(tag)

    def has_tag(self, tag):
        if tag is None:
            return False

        if self.expand_flags:
            return self.align.has_tag(tag)

        if tag == "FLAGS":
            return True
        return tag.upper() in set(self.aux_keys())

    def attributes(self, tag=None):
        """ Return the value of one tag, or a dictionary of all tags and their values. """
        if tag is not None:
            return self.get_tag_values(tag)
        return {t: self.get_tag_values(t) for t in self.get_all_tags()}

    # GFF3
    def format_attributes(self, parent_id=None):
        tags = [(t, self.get_tag_values(t)) for t in self.get_all_tags()]
        return format_attributes(tags, name=self.display_name, parent_id=parent_id, feature_id=self.primary_id)

    def gff3_string(self, parent_id=None):
        """ Format the alignment as a GFF3 line followed by one line for each split part. """
        feature_id = self.primary_id
        lines = [gff3_line(
            self.seq_id,
            self.source,
            self.method,
            self.start,
            self.end,
            self.score,
            self.strand,
            None,
            self.format_attributes(parent_id)
        )]

        for i, part in enumerate(self.get_SeqFeatures()):
            lines.append(part.gff3_string(parent_id=feature_id, part_id="%s.%d" % (feature_id, i + 1)))

        return "\n".join(lines)
