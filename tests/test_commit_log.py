import unittest

from domain.commit_log import parse_commit_subjects


class ParseCommitSubjectsTests(unittest.TestCase):
    def test_keeps_every_line_in_order(self) -> None:
        for subjects in ([], ["only"], ["fix bug", "add test"], ["c", "b", "a", "d", "e"]):
            with self.subTest(subjects=subjects):
                parsed = parse_commit_subjects("\n".join(subjects))
                self.assertEqual(parsed, tuple(subjects))

    def test_drops_trailing_blank_line(self) -> None:
        self.assertEqual(parse_commit_subjects("fix bug\nadd test\n"), ("fix bug", "add test"))
        self.assertEqual(parse_commit_subjects("fix bug\nadd test\n\n"), ("fix bug", "add test"))

    def test_empty_output_has_no_subjects(self) -> None:
        self.assertEqual(parse_commit_subjects(""), ())
        self.assertEqual(parse_commit_subjects("\n"), ())

    def test_handles_windows_line_endings(self) -> None:
        self.assertEqual(parse_commit_subjects("one\r\ntwo\r\n"), ("one", "two"))

    def test_only_newline_separates_subjects(self) -> None:
        parsed = parse_commit_subjects("fix\x0cbug\nadd\u2028test\nrefactor\x1cparser\nnote\x85end")

        self.assertEqual(parsed, ("fix\x0cbug", "add\u2028test", "refactor\x1cparser", "note\x85end"))


if __name__ == "__main__":
    unittest.main()
