"""
Tests for the shared field rules and the pydantic bodies built on them.
Run from the project root: python -m pytest tests/test_validation.py -v
"""
import unittest

from pydantic import ValidationError

from schemas.application import ApplicationCreate, ApplicationUpdate
from schemas.validation import (
    ADMIN_SCHEMA,
    CEP_MSG,
    CPF_MSG,
    DATE_LENGTH_MSG,
    DATE_MSG,
    EMAIL_MSG,
    FIELD_NAMES,
    NAME_CHARS_MSG,
    NAME_TOO_LONG_MSG,
    NAME_TOO_SHORT_MSG,
    PHONE_MSG,
    PUBLIC_SCHEMA,
    REQUIRED_MSG,
    UnknownFieldError,
)


def _valid_values():
    return {
        "nome": "Maria Silva",
        "email": "maria@example.com",
        "telefone": "(11) 98765-4321",
        "cpf": "123.456.789-09",
        "nascimento": "15/06/1990",
        "cep": "01310-100",
        "renda": "Entre R$2.500 e R$4.000",
        "ocupacao": "Autônomo(a)",
        "motivo": "Investir",
        "garantia": "Não",
    }


class TestNameRules(unittest.TestCase):
    def test_digits_and_symbols_rejected(self):
        for name in ("Maria 2", "Jo@o Silva", "Ana_Paula", "R2D2 Droid", "Ana-Clara"):
            with self.subTest(name=name):
                self.assertEqual(PUBLIC_SCHEMA.validate_field("nome", name), NAME_CHARS_MSG)
                self.assertEqual(ADMIN_SCHEMA.validate_field("nome", name), NAME_CHARS_MSG)

    def test_accents_and_periods_only_in_admin_variant(self):
        name = "José da Conceição Jr."
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nome", name), NAME_CHARS_MSG)
        self.assertIsNone(ADMIN_SCHEMA.validate_field("nome", name))

    def test_length_bounds(self):
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nome", ""), REQUIRED_MSG)
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nome", "Al"), NAME_TOO_SHORT_MSG)
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nome", "A" * 51), NAME_TOO_LONG_MSG)
        self.assertIsNone(PUBLIC_SCHEMA.validate_field("nome", "A" * 50))


class TestBirthDateRules(unittest.TestCase):
    def test_february_never_has_31_days(self):
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nascimento", "31/02/1990"), DATE_MSG)

    def test_leap_years(self):
        self.assertIsNone(PUBLIC_SCHEMA.validate_field("nascimento", "29/02/2004"))
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nascimento", "29/02/2003"), DATE_MSG)
        self.assertIsNone(PUBLIC_SCHEMA.validate_field("nascimento", "29/02/2000"))
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nascimento", "29/02/1900"), DATE_MSG)

    def test_thirty_day_months(self):
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nascimento", "31/04/1990"), DATE_MSG)
        self.assertIsNone(PUBLIC_SCHEMA.validate_field("nascimento", "30/04/1990"))
        self.assertIsNone(PUBLIC_SCHEMA.validate_field("nascimento", "31/05/1990"))

    def test_year_window(self):
        """Years outside 1900-2007 fail even for otherwise valid dates."""
        self.assertIsNone(PUBLIC_SCHEMA.validate_field("nascimento", "01/01/1900"))
        self.assertIsNone(PUBLIC_SCHEMA.validate_field("nascimento", "31/12/2007"))
        for value in ("31/12/1899", "01/01/2008", "15/06/2020", "15/06/1850"):
            with self.subTest(value=value):
                self.assertEqual(PUBLIC_SCHEMA.validate_field("nascimento", value), DATE_MSG)

    def test_impossible_day_or_month(self):
        for value in ("00/01/1990", "32/01/1990", "10/13/1990", "10/00/1990"):
            with self.subTest(value=value):
                self.assertEqual(PUBLIC_SCHEMA.validate_field("nascimento", value), DATE_MSG)

    def test_incomplete_date(self):
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nascimento", ""), REQUIRED_MSG)
        self.assertEqual(PUBLIC_SCHEMA.validate_field("nascimento", "15/06/19"), DATE_LENGTH_MSG)


class TestOtherFields(unittest.TestCase):
    def test_email_shape(self):
        self.assertEqual(PUBLIC_SCHEMA.validate_field("email", ""), REQUIRED_MSG)
        for value in ("not-an-email", "a@b", "joao..silva@example.com", ".joao@example.com"):
            with self.subTest(value=value):
                self.assertEqual(PUBLIC_SCHEMA.validate_field("email", value), EMAIL_MSG)
        self.assertIsNone(PUBLIC_SCHEMA.validate_field("email", "joao.silva+loan@mail.com.br"))

    def test_cpf_length_and_shape(self):
        self.assertEqual(PUBLIC_SCHEMA.validate_field("cpf", ""), CPF_MSG)
        self.assertEqual(PUBLIC_SCHEMA.validate_field("cpf", "123.456.789"), CPF_MSG)
        self.assertEqual(PUBLIC_SCHEMA.validate_field("cpf", "12345678909999"), CPF_MSG)
        self.assertIsNone(PUBLIC_SCHEMA.validate_field("cpf", "123.456.789-09"))

    def test_non_ascii_digits_rejected(self):
        cases = {
            "nascimento": ("١٥/٠٦/١٩٩٠", DATE_MSG),
            "telefone": ("(²²) ⁹⁸⁷⁶⁵-⁴³²¹", PHONE_MSG),
            "cpf": ("١٢٣.٤٥٦.٧٨٩-٠٩", CPF_MSG),
            "cep": ("٠١٣١٠-١٠٠", CEP_MSG),
        }
        for field, (value, message) in cases.items():
            with self.subTest(field=field):
                self.assertEqual(PUBLIC_SCHEMA.validate_field(field, value), message)
                self.assertEqual(ADMIN_SCHEMA.validate_field(field, value), message)

    def test_selection_fields_only_required(self):
        for field in ("renda", "ocupacao", "motivo", "garantia"):
            with self.subTest(field=field):
                self.assertEqual(PUBLIC_SCHEMA.validate_field(field, ""), REQUIRED_MSG)
                self.assertIsNone(PUBLIC_SCHEMA.validate_field(field, "anything"))

    def test_aggregate_validation(self):
        self.assertEqual(PUBLIC_SCHEMA.validate(_valid_values()), {})
        self.assertTrue(PUBLIC_SCHEMA.is_valid(_valid_values()))
        errors = PUBLIC_SCHEMA.validate({})
        self.assertEqual(set(errors), set(FIELD_NAMES))

    def test_message_spelling(self):
        self.assertEqual(CPF_MSG, "Insira um CPF válido!")
        self.assertEqual(CEP_MSG, "Insira um CEP válido!")
        self.assertEqual(DATE_LENGTH_MSG, "Insira uma data válida!")
        self.assertEqual(DATE_MSG, "Data inválida ou menor de 18 anos")

    def test_unknown_field(self):
        with self.assertRaises(UnknownFieldError):
            PUBLIC_SCHEMA.validate_field("apelido", "x")


class TestApplicationBodies(unittest.TestCase):
    def test_create_accepts_valid_wire_payload(self):
        body = ApplicationCreate.model_validate(_valid_values())
        self.assertEqual(body.name, "Maria Silva")
        self.assertEqual(body.to_wire(), _valid_values())

    def test_create_rejects_missing_and_invalid_fields(self):
        with self.assertRaises(ValidationError):
            ApplicationCreate.model_validate({})
        with self.assertRaises(ValidationError) as ctx:
            ApplicationCreate.model_validate({**_valid_values(), "nascimento": "31/02/1990"})
        self.assertIn(DATE_MSG, str(ctx.exception))

    def test_create_rejects_non_ascii_digits(self):
        with self.assertRaises(ValidationError) as ctx:
            ApplicationCreate.model_validate({**_valid_values(), "telefone": "(²²) ⁹⁸⁷⁶⁵-⁴³²¹"})
        self.assertIn(PHONE_MSG, str(ctx.exception))

    def test_update_uses_admin_name_rules(self):
        values = {**_valid_values(), "nome": "Conceição M."}
        with self.assertRaises(ValidationError):
            ApplicationCreate.model_validate(values)
        self.assertEqual(ApplicationUpdate.model_validate(values).name, "Conceição M.")


if __name__ == "__main__":
    unittest.main()
