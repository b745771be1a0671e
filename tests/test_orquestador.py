import json
import unittest
from datetime import date

from core.modelo import DatosOrcamento, ParametrosTarifa
from core.orquestador import ejecutar_orcamento, estimar_paneles_desde_datos, resultado_a_dict
from core.validacion import errores_consumo, errores_sistema, validar_entradas


def _datos(**kw) -> DatosOrcamento:
    base = dict(
        cliente="Cliente Test",
        fecha_propuesta="2026-10-19",
        tipo_consumo="media",
        simultaneidad=0.3,
        consumo_promedio=500,
        hsp=5.0,
        panel_potencia_w=575,
        valor_kit=14000.0,
        valor_mano_obra=4000.0,
    )
    base.update(kw)
    return DatosOrcamento(**base)


class TestOrquestador(unittest.TestCase):
    def test_happy_path(self):
        res = ejecutar_orcamento(_datos())

        for key in [
            "consumo_medio_kwh",
            "serie_consumo_12m",
            "n_paneles_calculado",
            "n_paneles",
            "kwp_final",
            "geracao_mensal_kwh",
            "asignacion",
            "fatura_geradora",
            "faturas_compensacao",
            "preco_total",
            "payback_meses",
            "retorno_25_anos",
            "parcelas",
            "fecha_propuesta",
            "validez",
        ]:
            self.assertIn(key, res)

        self.assertEqual(8, res["n_paneles"])
        self.assertAlmostEqual(552.0, res["geracao_mensal_kwh"])
        self.assertAlmostEqual(66.5, res["fatura_geradora"])
        self.assertAlmostEqual(18000.0, res["preco_total"])
        self.assertEqual(date(2026, 10, 26), res["validez"])
        self.assertEqual(12, len(res["serie_consumo_12m"]))

    def test_override_tiene_prioridad(self):
        res = ejecutar_orcamento(_datos(override_n_paneles=20))
        self.assertEqual(8, res["n_paneles_calculado"])
        self.assertEqual(20, res["n_paneles"])
        self.assertAlmostEqual(11.5, res["kwp_final"])

    def test_override_sin_calculo(self):
        res = ejecutar_orcamento(_datos(panel_potencia_w=0, override_n_paneles=10))
        self.assertIsNone(res["n_paneles_calculado"])
        self.assertEqual(10, res["n_paneles"])

    def test_sin_paneles_lanza_value_error(self):
        with self.assertRaises(ValueError):
            ejecutar_orcamento(_datos(consumo_promedio=0))

    def test_unidades_en_resultado(self):
        unidades = [{"id": "1", "contrato": "A", "consumo": 150}, {"id": "2", "contrato": "B", "consumo": 200}]
        res = ejecutar_orcamento(_datos(unidades=unidades))
        self.assertEqual(["A", "B"], [f["contrato"] for f in res["faturas_compensacao"]])
        self.assertGreater(res["n_paneles"], 8)

    def test_sin_inversion_payback_none(self):
        res = ejecutar_orcamento(_datos(valor_kit=0, valor_mano_obra=0))
        self.assertIsNone(res["payback_meses"])
        self.assertEqual({24: 0.0, 36: 0.0, 48: 0.0, 60: 0.0}, res["parcelas"])

    def test_validez_configurable(self):
        res = ejecutar_orcamento(_datos(), ParametrosTarifa(), dias_validez="15")
        self.assertEqual(date(2026, 11, 3), res["validez"])

    def test_estimacion_en_vivo(self):
        self.assertEqual(8, estimar_paneles_desde_datos(_datos()))
        self.assertIsNone(estimar_paneles_desde_datos(_datos(hsp=0)))

    def test_resultado_a_dict_serializable(self):
        snap = resultado_a_dict(ejecutar_orcamento(_datos()))
        self.assertEqual("2026-10-19", snap["fecha_propuesta"])
        self.assertIsInstance(snap["asignacion"], dict)
        json.dumps(snap)


class TestValidacion(unittest.TestCase):
    def test_datos_validos(self):
        self.assertEqual([], errores_consumo(_datos()))
        self.assertEqual([], errores_sistema(_datos()))
        validar_entradas(_datos())

    def test_sin_consumo(self):
        self.assertTrue(errores_consumo(_datos(consumo_promedio="")))
        self.assertEqual([], errores_consumo(_datos(consumo_promedio="", unidades=[{"contrato": "A", "consumo": 90}])))

    def test_sistema_invalido(self):
        self.assertTrue(errores_sistema(_datos(hsp=0)))
        self.assertTrue(errores_sistema(_datos(panel_potencia_w=0)))
        self.assertEqual([], errores_sistema(_datos(panel_potencia_w=0, override_n_paneles=6)))
        self.assertTrue(errores_sistema(_datos(pdf_valor="otro")))
        with self.assertRaises(ValueError):
            validar_entradas(_datos(simultaneidad=1.5))


if __name__ == "__main__":
    unittest.main()
