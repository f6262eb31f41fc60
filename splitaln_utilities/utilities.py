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
import sys
import time

""" A collection of various helper functions"""

# Characters that may appear unescaped in GFF3 attribute keys and values
gff_unsafe = re.compile(r"[^a-zA-Z0-9_.:?^*()\[\]@!+-]")


def get_splitaln_version():
    return 'v0.1.0'


def unknown_bases(n):
    """
    Make a placeholder sequence for data that is not available.
    :param n: Length of the placeholder
    :return: A string of n 'N' characters
    """
    return "N" * max(n, 0)


def escape(s):
    """ Percent-escape a string for use as a GFF3 attribute key or value. """
    return gff_unsafe.sub(lambda m: "".join("%%%02X" % b for b in m.group(0).encode()), str(s))


def parse_region(region):
    """
    Parse a samtools style region string.
    :param region: 'ctg', 'ctg:start' or 'ctg:start-end' (1-based, inclusive)
    :return: (seq_id, start, end). start and end are None when not given.
    """
    m = re.match(r'^(.+?)(?::([\d,]+)(?:-([\d,]+))?)?$', region)
    if not m:
        raise ValueError("Invalid region: %s" % region)

    seq_id = m.group(1)
    start = int(m.group(2).replace(",", "")) if m.group(2) else None
    end = int(m.group(3).replace(",", "")) if m.group(3) else None
    if start is not None and start < 1:
        raise ValueError("Region start must be a positive integer: %s" % region)
    if start is not None and end is not None and start > end:
        raise ValueError("Region start must be <= region end: %s" % region)

    return seq_id, start, end


def log(level, message):
    """ Log messages to standard error. """
    sys.stderr.write(time.ctime() + ' --- ' + level + ': ' + message + "\n")
    sys.stderr.flush()
