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

from splitaln_utilities.ReferenceFetcher import NoSequenceBackendError
from splitaln_utilities.utilities import unknown_bases


class ReferenceRegion:
    """ An interval of a reference sequence, giving access to its DNA and to the alignments that overlap it. """

    source_tag = "sam/bam"
    primary_tag = "region"
    method = "region"
    strand = 0

    def __init__(self, in_reader, in_seq_id, in_start, in_end):
        self.reader = in_reader
        self.seq_id = in_seq_id
        self.start = in_start
        self.end = in_end

        if self.start > self.end:
            raise ValueError("Region start (%d) must be <= region end (%d)" % (self.start, self.end))

    def __repr__(self):
        return "ReferenceRegion(%s:%d-%d)" % (self.seq_id, self.start, self.end)

    @property
    def length(self):
        return self.end - self.start + 1

    @property
    def name(self):
        return self.seq_id

    @property
    def display_name(self):
        return self.seq_id

    @property
    def primary_id(self):
        return self.seq_id

    def dna(self):
        try:
            return self.reader.fetcher.fetch(self.seq_id, self.start, self.end)
        except NoSequenceBackendError:
            return unknown_bases(self.length)

    def features(self):
        """ The wrapped alignments overlapping this region. """
        return list(self.reader.features(self.seq_id, self.start, self.end))
