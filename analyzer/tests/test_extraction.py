import unittest

from analyzer.exceptions import EmptyContent, ExtractionError
from analyzer.extraction import (
    extract_text,
    file_size_ok,
    file_type_from_name,
    is_very_long,
    looks_non_english,
)
from analyzer.tests.helpers import make_docx, make_encrypted_pdf, make_image_only_pdf, make_pdf


class TestTextExtraction(unittest.TestCase):
    def test_txt_is_returned_verbatim(self):
        raw = "  The parties agree.\n\nClause 1.  \n"
        result = extract_text(raw.encode("utf-8"), "txt")
        self.assertEqual(result.text, raw)
        self.assertIsNone(result.page_count)

    def test_txt_falls_back_to_cp1252(self):
        result = extract_text("Café agreement".encode("cp1252"), "txt")
        self.assertEqual(result.text, "Café agreement")

    def test_txt_with_undecodable_bytes_fails(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract_text(b"\x81\x8d\x8f\x90", "txt")
        self.assertIn("encoding", ctx.exception.message)

    def test_whitespace_txt_is_empty(self):
        with self.assertRaises(EmptyContent) as ctx:
            extract_text(b"   \n\t ", "txt")
        self.assertEqual(ctx.exception.message, "File appears to be empty")

    def test_docx_paragraphs_and_tables(self):
        data = make_docx(["This Agreement is binding.", "Second paragraph."], table=["Left", "Right"])
        result = extract_text(data, "docx")
        self.assertIn("This Agreement is binding.", result.text)
        self.assertIn("Second paragraph.", result.text)
        self.assertIn("Left\tRight", result.text)

    def test_empty_docx(self):
        with self.assertRaises(EmptyContent) as ctx:
            extract_text(make_docx([]), "docx")
        self.assertEqual(ctx.exception.message, "Document appears to be empty")

    def test_corrupt_docx(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract_text(b"definitely not a zip archive", "docx")
        self.assertIn("Unable to read DOCX", ctx.exception.message)

    def test_pdf_text_and_page_count(self):
        result = extract_text(make_pdf(["Confidentiality obligations last two years."]), "pdf")
        self.assertIn("Confidentiality obligations last two years.", result.text)
        self.assertEqual(result.page_count, 1)

    def test_image_only_pdf_is_empty_not_a_crash(self):
        with self.assertRaises(EmptyContent) as ctx:
            extract_text(make_image_only_pdf(), "pdf")
        self.assertIn("empty", ctx.exception.message)

    def test_corrupt_pdf(self):
        for data in (
            b"this is not a pdf",
            b"%PDF-1.4\ntrailer\n<</Root 1 0 R>>\nstartxref\n0\n%%EOF",
        ):
            with self.subTest(data=data):
                with self.assertRaises(ExtractionError) as ctx:
                    extract_text(data, "pdf")
                self.assertEqual(ctx.exception.message, "Unable to read PDF file. Please check if it's valid.")

    def test_password_protected_pdf(self):
        data = make_encrypted_pdf(["Confidential terms."], password="s3cret")
        with self.assertRaises(ExtractionError) as ctx:
            extract_text(data, "pdf")
        self.assertEqual(ctx.exception.message, "Password-protected files are not supported")

    def test_unsupported_type(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract_text(b"{\\rtf1 hello}", "rtf")
        self.assertIn("Unsupported file type", ctx.exception.message)


class TestUploadHelpers(unittest.TestCase):
    def test_file_type_from_extension(self):
        self.assertEqual(file_type_from_name("Lease.PDF"), "pdf")
        self.assertEqual(file_type_from_name("nda.docx"), "docx")
        self.assertEqual(file_type_from_name("notes.txt"), "txt")
        self.assertIsNone(file_type_from_name("old.doc"))
        self.assertIsNone(file_type_from_name("noextension"))

    def test_file_size_limit(self):
        self.assertTrue(file_size_ok(10 * 1024 * 1024, 10))
        self.assertFalse(file_size_ok(10 * 1024 * 1024 + 1, 10))

    def test_english_heuristic(self):
        self.assertFalse(looks_non_english("The party shall pay and the agreement will continue."))
        self.assertTrue(looks_non_english("Der Vertrag wird heute unterzeichnet."))

    def test_long_document(self):
        self.assertFalse(is_very_long("x" * 300000))
        self.assertTrue(is_very_long("x" * 300001))
