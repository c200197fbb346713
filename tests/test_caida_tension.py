import math
import unittest

from electrico.caida_tension import (
    calcular_caida,
    estado_por_caida,
    factor_trayecto,
    normalizar_metodo,
    reactancia_por_metro,
    resistencia_por_metro,
    resumir,
)
from electrico.contrato import ERROR, OK, WARNING, ResultadoAlimentador


def _caida(**kw):
    base = dict(corriente_a=12.3, longitud_m=18.0, seccion_mm2=2.08, tension_v=120.0, limite_pct=3.0)
    base.update(kw)
    return calcular_caida(**base)


class TestModeloFisico(unittest.TestCase):
    def test_resistencia_con_temperatura(self):
        r20 = resistencia_por_metro("Cu", 2.08, 20.0)
        self.assertAlmostEqual(r20, 0.0172 / 2.08)
        self.assertAlmostEqual(resistencia_por_metro("Cu", 2.08, 30.0), r20 * (1 + 0.00393 * 10))
        self.assertGreater(resistencia_por_metro("Al", 2.08), resistencia_por_metro("Cu", 2.08))

    def test_reactancia_por_metodo_y_seccion(self):
        self.assertEqual(reactancia_por_metro("conduit", 10.0), 0.00015)
        self.assertEqual(reactancia_por_metro("tubo", 10.0), 0.00015)
        self.assertEqual(reactancia_por_metro("raceway", 10.0), 0.00012)
        self.assertEqual(reactancia_por_metro("direct", 10.0), 0.00008)
        self.assertEqual(reactancia_por_metro("aéreo", 10.0), 0.0001)
        self.assertAlmostEqual(reactancia_por_metro("conduit", 33.6), 0.00015 * 0.9)
        self.assertAlmostEqual(reactancia_por_metro("conduit", 53.5), 0.00015 * 0.8)

    def test_factor_trayecto(self):
        self.assertEqual(factor_trayecto(1), 2.0)
        self.assertAlmostEqual(factor_trayecto(3), math.sqrt(3))

    def test_alias_metodo(self):
        self.assertEqual(normalizar_metodo(" Canalizacion "), "raceway")
        self.assertEqual(normalizar_metodo("DIRECTO"), "direct")

    def test_estados(self):
        self.assertEqual(estado_por_caida(3.1, 3.0), ERROR)
        self.assertEqual(estado_por_caida(2.5, 3.0), WARNING)
        self.assertEqual(estado_por_caida(2.39, 3.0), OK)
        self.assertEqual(estado_por_caida(3.0, 3.0), WARNING)


class TestCalcularCaida(unittest.TestCase):
    def test_ramal_14_awg_18_m(self):
        r3 = _caida(limite_pct=3.0)
        r5 = _caida(limite_pct=5.0)
        self.assertEqual(r3.estado, WARNING)
        self.assertEqual(r5.estado, OK)
        self.assertTrue(2.4 <= r3.caida_pct <= 3.0, r3.caida_pct)
        self.assertAlmostEqual(r3.caida_pct, r5.caida_pct)
        self.assertAlmostEqual(r3.caida_v, r3.caida_pct * 120.0 / 100.0)

    def test_longitud_critica_alcanza_el_limite(self):
        r = _caida()
        self.assertGreater(r.longitud_critica_m, 18.0)
        en_critica = _caida(longitud_m=r.longitud_critica_m)
        self.assertAlmostEqual(en_critica.caida_pct, 3.0, places=9)

    def test_monotona_en_longitud(self):
        previo = -1.0
        for l_m in (0.0, 5.0, 10.0, 25.0, 60.0):
            pct = _caida(longitud_m=l_m).caida_pct
            self.assertGreaterEqual(pct, previo)
            previo = pct

    def test_trifasico_menor_que_monofasico(self):
        self.assertLess(_caida(fases=3).caida_pct, _caida(fases=1).caida_pct)

    def test_tension_cero_es_error_sin_excepcion(self):
        r = _caida(tension_v=0.0)
        self.assertEqual(r.estado, ERROR)
        self.assertEqual(r.caida_pct, 0.0)
        self.assertEqual(r.longitud_critica_m, 0.0)

    def test_sin_seccion_es_error(self):
        self.assertEqual(_caida(seccion_mm2=0.0).estado, ERROR)

    def test_corriente_cero(self):
        r = _caida(corriente_a=0.0)
        self.assertEqual(r.caida_pct, 0.0)
        self.assertEqual(r.estado, OK)

    def test_temperatura_que_anula_la_resistencia(self):
        for t in (-300.0, float("nan")):
            with self.subTest(t=t):
                r = _caida(temp_c=t)
                self.assertEqual(r.estado, ERROR)
                self.assertEqual(r.caida_pct, 0.0)

    def test_longitud_critica_positiva_con_corriente(self):
        for t in (-40.0, 30.0, 90.0):
            with self.subTest(t=t):
                self.assertGreater(_caida(temp_c=t).longitud_critica_m, 0.0)


class TestResumen(unittest.TestCase):
    def _alimentador(self, pct_objetivo):
        caida = _caida(limite_pct=5.0, longitud_m=18.0 * pct_objetivo / _caida().caida_pct)
        return ResultadoAlimentador(
            material="Cu", calibre="14 AWG", seccion_mm2=2.08, r_ohm_km=8.286, corriente_a=12.3,
            ampacidad_a=20.0, breaker_a=15, marcado=False, caida=caida,
        )

    def test_peor_caso_y_conteo(self):
        ramales = [_caida(longitud_m=5.0), _caida(longitud_m=30.0)]
        alim = self._alimentador(1.0)
        s = resumir(ramales, alim, limite_ramal_pct=3.0, limite_total_pct=5.0)
        self.assertAlmostEqual(s.peor_caso_pct, alim.caida.caida_pct + ramales[1].caida_pct)
        self.assertEqual(s.fuera_de_limite, 1)
        self.assertEqual(s.estado_global, ERROR)

    def test_todo_ok(self):
        ramales = [_caida(longitud_m=5.0)]
        s = resumir(ramales, self._alimentador(0.5), limite_ramal_pct=3.0, limite_total_pct=5.0)
        self.assertEqual(s.fuera_de_limite, 0)
        self.assertEqual(s.estado_global, OK)

    def test_tension_cero_no_cuenta_como_fuera_de_limite(self):
        ramales = [_caida(tension_v=0.0), _caida(tension_v=0.0)]
        s = resumir(ramales, self._alimentador(0.5), limite_ramal_pct=3.0, limite_total_pct=5.0)
        self.assertEqual(s.fuera_de_limite, 0)
        self.assertEqual(s.estado_global, ERROR)


if __name__ == "__main__":
    unittest.main()
