import unittest
from datetime import date

from core.finanzas import fecha_propuesta, fecha_validez, parcelas_financiamento, payback_meses, retorno_25_anos
from core.modelo import ParametrosTarifa


class TestFinanzas(unittest.TestCase):
    def test_escenario_e_payback_no_disponible(self):
        self.assertIsNone(payback_meses(10000, 0))
        self.assertIsNone(payback_meses(10000, -25.0))
        self.assertIsNone(payback_meses(0, 500))

    def test_payback_y_retorno(self):
        self.assertAlmostEqual(20.0, payback_meses(10000, 500))
        self.assertAlmostEqual(500 * 12 * 25 - 10000, retorno_25_anos(500, 10000))
        self.assertAlmostEqual(-10000.0, retorno_25_anos(0, 10000))

    def test_parcelas_proporcionales_a_la_referencia(self):
        parcelas = parcelas_financiamento(12000.0)
        self.assertEqual([24, 36, 48, 60], list(parcelas.keys()))
        self.assertAlmostEqual(791.35, parcelas[24])
        self.assertAlmostEqual(489.39, parcelas[60])

        media = parcelas_financiamento(6000.0)
        self.assertAlmostEqual(616.40 / 2, media[36])

    def test_parcelas_referencia_invalida(self):
        self.assertEqual({}, parcelas_financiamento(10000.0, ParametrosTarifa(monto_ref_financiamento=0.0)))

    def test_fecha_validez(self):
        self.assertEqual(date(2026, 10, 26), fecha_validez("2026-10-19", 7))
        self.assertEqual(date(2026, 11, 3), fecha_validez(date(2026, 10, 19), "15"))
        self.assertEqual(date(2026, 10, 26), fecha_validez("2026-10-19", "abc"))
        self.assertEqual(date(2026, 10, 26), fecha_validez("2026-10-19", ""))

    def test_fecha_invalida_usa_hoy(self):
        self.assertEqual(date.today(), fecha_propuesta("19/10/2026"))
        self.assertEqual(date.today(), fecha_propuesta(None))


if __name__ == "__main__":
    unittest.main()
