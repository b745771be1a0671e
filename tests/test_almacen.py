import tempfile
import unittest
from pathlib import Path

from core.almacen import AlmacenJSON, PerfilEmpresa
from core.modelo import DatosOrcamento


class TestAlmacenJSON(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.almacen = AlmacenJSON(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_perfil_por_defecto_y_guardado(self):
        perfil = self.almacen.cargar_perfil()
        self.assertEqual("#e65100", perfil.color_tema)
        self.assertEqual("7", perfil.dias_validez)

        self.almacen.guardar_perfil(PerfilEmpresa(razao="RD Solar", cnpj="00.000/0001-00", dias_validez="10"))
        otro = AlmacenJSON(self._tmp.name).cargar_perfil()
        self.assertEqual("RD Solar", otro.razao)
        self.assertEqual("10", otro.dias_validez)

    def test_guardar_y_cargar_cotizacion(self):
        datos = DatosOrcamento(cliente="Ana", consumo_promedio=500, unidades=[{"id": "1", "contrato": "A", "consumo": 150}])
        cid = self.almacen.guardar_cotizacion("Ana - casa", datos, resumen={"n_paneles": 8})

        lista = self.almacen.listar_cotizaciones()
        self.assertEqual(1, len(lista))
        self.assertEqual("Ana - casa", lista[0]["nombre"])
        self.assertEqual(8, lista[0]["resumen"]["n_paneles"])

        cargado = self.almacen.cargar_cotizacion(cid)
        self.assertEqual(datos, cargado)
        self.assertIsNone(self.almacen.cargar_cotizacion(123))

    def test_snapshot_inmutable(self):
        datos = DatosOrcamento(cliente="Ana", consumo_promedio=500)
        cid1 = self.almacen.guardar_cotizacion("v1", datos)
        datos.consumo_promedio = 900
        cid2 = self.almacen.guardar_cotizacion("v2", datos)

        self.assertNotEqual(cid1, cid2)
        self.assertEqual(500, self.almacen.cargar_cotizacion(cid1).consumo_promedio)
        self.assertEqual(900, self.almacen.cargar_cotizacion(cid2).consumo_promedio)

    def test_nombre_vacio(self):
        with self.assertRaises(ValueError):
            self.almacen.guardar_cotizacion("  ", DatosOrcamento())

    def test_eliminar(self):
        cid = self.almacen.guardar_cotizacion("x", DatosOrcamento())
        self.assertTrue(self.almacen.eliminar_cotizacion(cid))
        self.assertFalse(self.almacen.eliminar_cotizacion(cid))
        self.assertEqual([], self.almacen.listar_cotizaciones())

    def test_archivo_corrupto_degrada_a_vacio(self):
        Path(self._tmp.name, "cotizaciones.json").write_text("{no es json", encoding="utf-8")
        Path(self._tmp.name, "perfil_empresa.json").write_text("[]", encoding="utf-8")
        with self.assertLogs("core.almacen", level="WARNING"):
            self.assertEqual([], self.almacen.listar_cotizaciones())
        self.assertEqual(PerfilEmpresa(), self.almacen.cargar_perfil())

    def test_campos_desconocidos_se_ignoran(self):
        Path(self._tmp.name, "perfil_empresa.json").write_text('{"razao": "X", "viejo": 1}', encoding="utf-8")
        self.assertEqual("X", self.almacen.cargar_perfil().razao)


if __name__ == "__main__":
    unittest.main()
