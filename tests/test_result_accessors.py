import copy
import unittest

from core.modelo import DatosOrcamento
from core.orquestador import ejecutar_orcamento, resultado_a_dict
from core.result_accessors import (
    as_float,
    as_int,
    get_asignacion,
    get_economia_mensal,
    get_fatura_geradora,
    get_faturas_compensacao,
    get_kwp_final,
    get_n_paneles,
    get_payback_meses,
    get_preco_total,
    get_serie_consumo,
)


class TestResultAccessors(unittest.TestCase):
    def test_res_parcial_no_revienta_y_tipos(self):
        for res in ({}, None):
            self.assertIsInstance(get_asignacion(res), dict)
            self.assertIsInstance(get_n_paneles(res), int)
            self.assertIsInstance(get_kwp_final(res), float)
            self.assertIsInstance(get_serie_consumo(res), list)
            self.assertIsInstance(get_faturas_compensacao(res), list)
            self.assertIsInstance(get_fatura_geradora(res), float)
            self.assertIsNone(get_payback_meses(res))

    def test_dataclass_y_snapshot_equivalentes(self):
        datos = DatosOrcamento(consumo_promedio=500, hsp=5.0, unidades=[{"contrato": "A", "consumo": 150}], valor_kit=9000)
        res = ejecutar_orcamento(datos)
        snap = resultado_a_dict(res)

        self.assertAlmostEqual(get_fatura_geradora(res), get_fatura_geradora(snap))
        self.assertAlmostEqual(get_economia_mensal(res), get_economia_mensal(snap))
        self.assertEqual(
            [f["contrato"] for f in get_faturas_compensacao(res)],
            [f["contrato"] for f in get_faturas_compensacao(snap)],
        )
        self.assertAlmostEqual(9000.0, get_preco_total(snap))

    def test_fallback_sin_asignacion(self):
        res = {"fatura_geradora": 70.0, "faturas_compensacao": [{"contrato": "A", "nova_fatura": 80.0}]}
        self.assertAlmostEqual(70.0, get_fatura_geradora(res))
        self.assertEqual("A", get_faturas_compensacao(res)[0]["contrato"])

    def test_no_muta_res(self):
        res = {"n_paneles": "8", "kwp_final": "4.6", "serie_consumo_12m": [1, "2"], "payback_meses": 30}
        before = copy.deepcopy(res)
        self.assertEqual(8, get_n_paneles(res))
        self.assertAlmostEqual(4.6, get_kwp_final(res))
        self.assertEqual([1.0, 2.0], get_serie_consumo(res))
        self.assertAlmostEqual(30.0, get_payback_meses(res))
        self.assertEqual(before, res)

    def test_as_float_as_int(self):
        self.assertEqual(0.0, as_float("x"))
        self.assertEqual(3, as_int("3.7"))
        self.assertEqual(5, as_int(None, 5))


if __name__ == "__main__":
    unittest.main()
