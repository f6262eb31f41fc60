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

import re
from collections import namedtuple

""" CIGAR operations and their classification for splitting spliced alignments. """

# Operations whose length advances the running offsets while splitting. Reference-only and query-only
# consumption are intentionally not distinguished.
BLOCK_OPS = {"M", "D", "S", "H", "P"}
SKIP_OP = "N"

# pysam/htslib integer operation codes, indexed by code
PYSAM_OPS = "MIDNSHP=XB"

cigar_token = re.compile(r'(\d+)([MIDNSHP=XB])')


class CigarOp(namedtuple("CigarOp", ["op", "count"])):
    """ A single (operation, length) pair of an alignment. """

    __slots__ = ()

    def __str__(self):
        return "%s%d" % (self.op, self.count)

    @property
    def is_skip(self):
        return classify_op(self.op) == "skip"

    @property
    def is_block(self):
        return classify_op(self.op) == "block"


def classify_op(op):
    """
    Classify an operation code.
    :return: 'skip', 'block' or 'other'
    """
    if op == SKIP_OP:
        return "skip"
    if op.upper() in BLOCK_OPS:
        return "block"
    return "other"


def parse_cigar(cigar):
    """
    Parse a SAM CIGAR string (e.g. '50M200N30M') into a list of CigarOp objects.
    '*' and the empty string give an empty list.
    """
    if cigar in ("", "*"):
        return []

    ops = []
    pos = 0
    for m in cigar_token.finditer(cigar):
        if m.start() != pos:
            raise ValueError("Invalid CIGAR string: %s" % cigar)
        ops.append(CigarOp(m.group(2), int(m.group(1))))
        pos = m.end()

    if pos != len(cigar):
        raise ValueError("Invalid CIGAR string: %s" % cigar)

    return ops


def from_cigartuples(cigartuples):
    """ Convert pysam cigartuples, (int code, length) pairs, into CigarOp objects. """
    if not cigartuples:
        return []

    ops = []
    for code, count in cigartuples:
        if not 0 <= code < len(PYSAM_OPS):
            raise ValueError("Unknown CIGAR operation code: %d" % code)
        ops.append(CigarOp(PYSAM_OPS[code], count))

    return ops


def to_cigar_str(ops):
    """ Format operations as a SAM CIGAR string (length before operation). """
    return "".join("%d%s" % (i.count, i.op) for i in ops) or "*"


def ops_str(ops):
    """ Format operations as concatenated operation/length text (e.g. 'M50N200M30'). """
    return "".join(str(i) for i in ops)


def block_length(ops):
    """ Total length of the block-consuming operations. """
    return sum(i.count for i in ops if i.is_block)


def model_length(ops):
    """ Total length of block-consuming and skip operations. """
    return sum(i.count for i in ops if i.is_block or i.is_skip)


def count_skips(ops):
    return sum(1 for i in ops if i.is_skip)
