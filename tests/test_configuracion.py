import tempfile
import unittest
from pathlib import Path

from core.configuracion import (
    catalogos_desde_dict,
    cargar_catalogos,
    cargar_parametros,
    parametros_desde_dict,
)
from core.modelo import ParametrosTarifa


class TestConfiguracion(unittest.TestCase):
    def test_parametros_yaml_del_repo(self):
        p = cargar_parametros()
        self.assertAlmostEqual(1.22, p.tarifa)
        self.assertAlmostEqual(0.19, p.taxa_compensacao)
        self.assertAlmostEqual(50.0, p.custo_disponibilidade)
        self.assertAlmostEqual(0.80, p.fator_perdas)
        self.assertAlmostEqual(791.35, p.cuotas_ref_financiamento[24])

    def test_parametros_sin_archivo_usa_defaults(self):
        self.assertEqual(ParametrosTarifa(), cargar_parametros(Path("/no/existe/parametros.yaml")))

    def test_parametros_parciales(self):
        p = parametros_desde_dict({"tarifa": 0.95, "financiamento": {"cuotas_referencia": {"12": 1100}}})
        self.assertAlmostEqual(0.95, p.tarifa)
        self.assertAlmostEqual(0.19, p.taxa_compensacao)
        self.assertEqual({12: 1100.0}, p.cuotas_ref_financiamento)

    def test_catalogos_del_repo(self):
        cat = cargar_catalogos()
        self.assertEqual(27, len(cat.capitales))
        self.assertTrue(all(c.hsp > 0 for c in cat.capitales))
        nombres = [c.capital for c in cat.capitales_ordenadas()]
        self.assertEqual(sorted(nombres), nombres)
        self.assertIsNotNone(cat.inversor("Solis"))
        self.assertIsNotNone(cat.panel("JA Solar"))
        self.assertIsNone(cat.inversor("No existe"))

    def test_catalogo_invalido_nombra_la_clave(self):
        with self.assertRaisesRegex(ValueError, "hsp"):
            catalogos_desde_dict({"capitales": [{"capital": "X"}]})
        with self.assertRaisesRegex(ValueError, "hsp"):
            catalogos_desde_dict({"capitales": [{"capital": "X", "hsp": 0}]})
        with self.assertRaisesRegex(ValueError, "tipo"):
            catalogos_desde_dict({"inversores": [{"nombre": "Y"}]})

    def test_yaml_que_no_es_dict(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "parametros.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                cargar_parametros(path)


if __name__ == "__main__":
    unittest.main()
