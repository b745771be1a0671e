import unittest

from core.asignacion_creditos import asignar_creditos, liquidar_unidad
from core.modelo import ParametrosTarifa, UnidadCompensacion


class TestAsignacionCreditos(unittest.TestCase):
    def setUp(self):
        self.p = ParametrosTarifa()

    def test_escenario_b_geradora_compensada(self):
        r = asignar_creditos(600, 500, 0.3, [], self.p)

        self.assertAlmostEqual(150.0, r.autoconsumo_kwh)
        self.assertAlmostEqual(350.0, r.geradora.consumo_kwh)
        self.assertAlmostEqual(450.0, r.energia_injetada_kwh)
        self.assertAlmostEqual(350.0, r.geradora.compensado_kwh)
        self.assertAlmostEqual(0.0, r.geradora.nao_compensado_kwh)
        self.assertAlmostEqual(100.0, r.creditos_sobrantes_kwh)
        # 350 * 0.19 = 66.5 > mínimo
        self.assertAlmostEqual(66.5, r.geradora.nova_fatura)

    def test_escenario_c_prioridad_en_orden(self):
        unidades = [{"contrato": "A", "consumo": 150}, {"contrato": "B", "consumo": 200}]
        r = asignar_creditos(600, 500, 0.3, unidades, self.p)

        a, b = r.compensacion
        self.assertEqual(("A", "B"), (a.contrato, b.contrato))
        self.assertAlmostEqual(100.0, a.compensado_kwh)
        self.assertAlmostEqual(50.0, a.nao_compensado_kwh)
        self.assertAlmostEqual(100 * 0.19 + 50 * 1.22, a.nova_fatura)
        self.assertAlmostEqual(0.0, b.compensado_kwh)
        self.assertAlmostEqual(200 * 1.22, b.nova_fatura)
        self.assertAlmostEqual(0.0, r.creditos_sobrantes_kwh)

        invertido = asignar_creditos(600, 500, 0.3, list(reversed(unidades)), self.p)
        self.assertAlmostEqual(100.0, invertido.compensacion[0].compensado_kwh)
        self.assertEqual("B", invertido.compensacion[0].contrato)
        self.assertAlmostEqual(0.0, invertido.compensacion[1].compensado_kwh)

    def test_escenario_d_consumo_cero_sin_linea(self):
        r = asignar_creditos(600, 500, 0.3, [UnidadCompensacion("Z", 0.0)], self.p)
        self.assertEqual([], r.compensacion)
        self.assertAlmostEqual(100.0, r.creditos_sobrantes_kwh)

        neg = asignar_creditos(600, 500, 0.3, [{"contrato": "N", "consumo": -40}, {"contrato": "X", "consumo": 30}], self.p)
        self.assertEqual(["X"], [f.contrato for f in neg.compensacion])
        self.assertAlmostEqual(70.0, neg.creditos_sobrantes_kwh)

    def test_factura_nunca_bajo_minimo(self):
        casos = [(0, 0, 0.3), (10000, 100, 0.7), (50, 800, 0.5), (600, 1, 0.3)]
        for gen, cons, s in casos:
            r = asignar_creditos(gen, cons, s, [{"contrato": "U", "consumo": 5}], self.p)
            for f in [r.geradora] + r.compensacion:
                self.assertGreaterEqual(f.nova_fatura, self.p.custo_disponibilidade)

    def test_conservacion_de_creditos(self):
        unidades = [{"contrato": str(i), "consumo": c} for i, c in enumerate([120, 0, 300, 45])]
        for gen in (0, 200, 450, 900, 5000):
            r = asignar_creditos(gen, 400, 0.5, unidades, self.p)
            usados = r.geradora.compensado_kwh + sum(f.compensado_kwh for f in r.compensacion)
            self.assertAlmostEqual(r.energia_injetada_kwh, usados + r.creditos_sobrantes_kwh)
            self.assertGreaterEqual(r.creditos_sobrantes_kwh, -1e-9)

    def test_simultaneidad_fuera_de_rango_no_crea_creditos(self):
        unidades = [{"contrato": "A", "consumo": 300}]
        for s in (1.5, -0.5):
            r = asignar_creditos(600, 500, s, unidades, self.p)
            usados = r.geradora.compensado_kwh + sum(f.compensado_kwh for f in r.compensacion)
            self.assertLessEqual(usados, r.energia_injetada_kwh + 1e-9)
            self.assertGreaterEqual(r.geradora.consumo_kwh, 0.0)
            for f in [r.geradora] + r.compensacion:
                self.assertGreaterEqual(f.compensado_kwh, 0.0)

        r = asignar_creditos(600, 500, 1.5, unidades, self.p)
        self.assertAlmostEqual(100.0, r.energia_injetada_kwh)
        self.assertAlmostEqual(100.0, r.compensacion[0].compensado_kwh)

    def test_prioridad_estricta(self):
        # si una unidad queda con parte sin compensar, las siguientes no reciben créditos
        unidades = [{"contrato": str(i), "consumo": c} for i, c in enumerate([80, 200, 60])]
        r = asignar_creditos(600, 500, 0.3, unidades, self.p)
        visto_parcial = False
        for f in r.compensacion:
            if visto_parcial:
                self.assertAlmostEqual(0.0, f.compensado_kwh)
            if f.nao_compensado_kwh > 0:
                visto_parcial = True

    def test_totales_y_economia(self):
        unidades = [{"contrato": "A", "consumo": 150}, {"contrato": "B", "consumo": 200}]
        r = asignar_creditos(600, 500, 0.3, unidades, self.p, inversion_total=18000.0)

        self.assertAlmostEqual((500 + 150 + 200) * 1.22, r.fatura_antiga_total)
        self.assertAlmostEqual(66.5 + 80.0 + 244.0, r.fatura_nova_total)
        self.assertAlmostEqual(r.fatura_antiga_total - r.fatura_nova_total, r.economia_mensal)
        self.assertAlmostEqual(18000.0 / r.economia_mensal, r.payback_meses)
        self.assertAlmostEqual(r.economia_mensal * 12 * 25 - 18000.0, r.retorno_25_anos)

    def test_liquidar_unidad_minimo(self):
        f = liquidar_unidad("A", 100.0, 100.0, self.p)
        self.assertAlmostEqual(50.0, f.nova_fatura)
        f = liquidar_unidad("A", 100.0, -20.0, self.p)
        self.assertAlmostEqual(0.0, f.compensado_kwh)
        self.assertAlmostEqual(122.0, f.nova_fatura)

    def test_tarifa_alternativa(self):
        p = ParametrosTarifa(tarifa=1.0, taxa_compensacao=0.1, custo_disponibilidade=10.0)
        r = asignar_creditos(0, 100, 0.0, [], p)
        self.assertAlmostEqual(100.0, r.geradora.nova_fatura)


if __name__ == "__main__":
    unittest.main()
