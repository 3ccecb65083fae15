import unittest

from utils.masks import CEP_MASK, CPF_MASK, DATE_MASK, PHONE_MASK, apply_mask, mask_field


class TestApplyMask(unittest.TestCase):
    def test_full_values(self):
        self.assertEqual(apply_mask(PHONE_MASK, "11987654321"), "(11) 98765-4321")
        self.assertEqual(apply_mask(CPF_MASK, "12345678909"), "123.456.789-09")
        self.assertEqual(apply_mask(DATE_MASK, "15061990"), "15/06/1990")
        self.assertEqual(apply_mask(CEP_MASK, "01310100"), "01310-100")

    def test_partial_input_stops_at_last_digit(self):
        """No trailing literals, so incomplete input stays shorter than the mask."""
        self.assertEqual(apply_mask(DATE_MASK, "0102"), "01/02")
        self.assertEqual(apply_mask(PHONE_MASK, "119"), "(11) 9")
        self.assertEqual(apply_mask(PHONE_MASK, "1"), "(1")

    def test_already_masked_value_is_stable(self):
        self.assertEqual(apply_mask(PHONE_MASK, "(11) 98765-4321"), "(11) 98765-4321")
        self.assertEqual(apply_mask(CPF_MASK, "123.456.789-09"), "123.456.789-09")

    def test_non_digits_dropped_and_overflow_truncated(self):
        self.assertEqual(apply_mask(CEP_MASK, "abc"), "")
        self.assertEqual(apply_mask(CEP_MASK, "01a310-1009999"), "01310-100")

    def test_non_ascii_digits_dropped(self):
        self.assertEqual(apply_mask(DATE_MASK, "١٥٠٦١٩٩٠"), "")
        self.assertEqual(mask_field("telefone", "²²⁹⁸⁷⁶⁵⁴³²¹"), "")

    def test_mask_field(self):
        self.assertEqual(mask_field("telefone", "11 98765 4321"), "(11) 98765-4321")
        self.assertEqual(mask_field("nome", "Maria 123"), "Maria 123")


if __name__ == "__main__":
    unittest.main()
