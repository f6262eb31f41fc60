import array
import sys

from conftest import make_header, make_record, write_bam
import splitaln_gff
import splitaln_segments
import splitaln_tags


def run(monkeypatch, module, args):
    monkeypatch.setattr(sys, "argv", [module.__name__ + ".py"] + args)
    module.main()


def test_gff(monkeypatch, tmp_path, bam_file, fasta_file):
    out = tmp_path / "out.gff"
    run(monkeypatch, splitaln_gff, [bam_file, "-r", fasta_file, "-o", str(out)])
    lines = out.read_text().rstrip("\n").split("\n")
    assert lines[0] == "##gff-version 3"
    assert len(lines) == 5
    assert [l.split("\t")[3] for l in lines[1:]] == ["100", "1000", "1000", "1250"]
    assert "Parent=read1:chr1:1000" in lines[3]


def test_gff_no_split(monkeypatch, tmp_path, bam_file):
    out = tmp_path / "out.gff"
    run(monkeypatch, splitaln_gff, [bam_file, "--no-split", "-e", "-o", str(out)])
    lines = out.read_text().rstrip("\n").split("\n")
    assert len(lines) == 3
    assert "REVERSED=1" in lines[1]


def test_gff_region(monkeypatch, capsys, bam_file):
    run(monkeypatch, splitaln_gff, [bam_file, "-g", "chr1:900-1100"])
    lines = capsys.readouterr().out.rstrip("\n").split("\n")
    assert len(lines) == 4
    assert all(l.split("\t")[8].startswith("Name=read1") for l in lines[1:])


def test_segments(monkeypatch, capsys, bam_file, fasta_file):
    run(monkeypatch, splitaln_segments, [bam_file, "-r", fasta_file])
    lines = [l.split("\t") for l in capsys.readouterr().out.rstrip("\n").split("\n")]
    assert lines == [
        ["read2", "chr1", "100", "139", "+", "M40", "1", "40", "-"],
        ["read1", "chr1", "1000", "1049", "+", "M50", "1", "50", "+"],
        ["read1", "chr1", "1250", "1279", "+", "M30", "51", "80", "+"],
    ]


def test_tags(monkeypatch, capsys, bam_file):
    run(monkeypatch, splitaln_tags, [bam_file])
    lines = capsys.readouterr().out.rstrip("\n").split("\n")
    assert lines == ["read2\tFLAGS\tREVERSED", "read1\tNM\t2", "read1\tXS\t+", "read1\tFLAGS\t"]


def test_tags_expanded(monkeypatch, capsys, bam_file):
    run(monkeypatch, splitaln_tags, [bam_file, "-e"])
    lines = capsys.readouterr().out.rstrip("\n").split("\n")
    assert "read2\tREVERSED\t1" in lines
    assert "read1\tREVERSED\t0" in lines
    assert not any("\tFLAGS\t" in l for l in lines)


def test_tags_array_values(monkeypatch, capsys, tmp_path):
    header = make_header()
    bam = write_bam(tmp_path / "array.bam", header, [
        make_record(header, "r", 0, 0, 9, "20M", "A" * 20, 60,
                    tags=[("ZB", array.array("i", [1, 2, 3]), None)]),
    ])
    run(monkeypatch, splitaln_tags, [bam])
    lines = capsys.readouterr().out.rstrip("\n").split("\n")
    assert lines == ["r\tZB\t1,2,3", "r\tFLAGS\t"]


def test_segments_sequence_missing_from_reference(monkeypatch, tmp_path, fasta_file):
    header = make_header()
    bam = write_bam(tmp_path / "chr2.bam", header, [
        make_record(header, "read4", 0, 1, 9, "10M50N10M", "T" * 20, 60),
    ])
    out = tmp_path / "segments.tsv"
    run(monkeypatch, splitaln_segments, [bam, "-r", fasta_file, "-o", str(out)])
    lines = [l.split("\t") for l in out.read_text().rstrip("\n").split("\n")]
    assert [l[1:4] for l in lines] == [["chr2", "10", "19"], ["chr2", "70", "79"]]
