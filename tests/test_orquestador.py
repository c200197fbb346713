import unittest

from electrico.caida_tension import resistencia_por_metro
from electrico.contrato import ERROR, OK, WARNING
from electrico.normas import ParametroNormativo, ProveedorTabla
from nucleo.errores import DanglingReferenceError, ErrorValidacionEntrada
from nucleo.modelo import Ambiente, Consumo, OpcionesCalculo
from nucleo.orquestador import calcular_desde_payload, ejecutar_calculo


def _casa():
    ambientes = [
        Ambiente("Living Room", 18.5),
        Ambiente("Cocina", 12.0),
        Ambiente("Dormitorio", 14.0),
        Ambiente("Baño", 4.5),
    ]
    consumos = [
        Consumo("TV", "Living Room", 120.0),
        Consumo("Nevera", "cocina", 350.0),
        Consumo("Microondas", "Cocina", 1200.0, factor_uso=0.5),
        Consumo("Lámpara", "Dormitorio", 60.0),
    ]
    return ambientes, consumos


def _sala():
    return [Ambiente("Sala", 20.0)], [Consumo("TV", "Sala", 1000.0)]


class TestEscenarios(unittest.TestCase):
    def test_living_room(self):
        res = ejecutar_calculo([Ambiente("Living Room", 18.5)], [Consumo("TV", "Living Room", 120.0)])

        (carga,) = res["loads_by_room"]
        self.assertEqual(carga["room"], "Living Room")
        self.assertAlmostEqual(carga["lighting_va"], 597.55, places=6)
        self.assertAlmostEqual(carga["outlet_va"], 120.0)
        self.assertAlmostEqual(carga["total_va"], 717.55, places=6)
        self.assertAlmostEqual(res["totals"]["total_connected_va"], 717.55, places=6)

        circuitos = res["proposed_circuits"]
        self.assertEqual([c["type"] for c in circuitos], ["lighting", "outlet"])
        for c in circuitos:
            self.assertEqual(c["suggested_breaker"], 15)
            self.assertEqual(c["suggested_gauge"], "14 AWG")
            self.assertEqual(c["rooms"], ["Living Room"])

        self.assertEqual(res["voltage_drop"]["summary"]["overall_status"], OK)
        self.assertEqual(res["grounding"]["egc_mm2"], 6.0)
        self.assertEqual(res["warnings"], [])

    def test_puesta_tierra_100_a(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(main_breaker_a=100))
        self.assertEqual(res["grounding"]["egc_mm2"], 10.0)
        self.assertEqual(res["grounding"]["gec_mm2"], 16.0)
        self.assertEqual(res["grounding"]["main_breaker_a"], 100.0)

    def test_ramal_12_3_a_a_18_m(self):
        res = ejecutar_calculo(
            [Ambiente("Taller", 2.0)],
            [Consumo("Compresor", "Taller", 12.3 * 120.0)],
            OpcionesCalculo(voltage_v=120.0, longitud_ramal_m=18.0),
        )
        (tomas,) = [c for c in res["voltage_drop"]["circuits"] if c["id"] == "C002"]
        self.assertAlmostEqual(tomas["current_a"], 12.3)
        self.assertEqual(tomas["status"], WARNING)
        self.assertTrue(2.4 <= tomas["drop_pct"] <= 3.0)
        self.assertLess(tomas["drop_pct"], 0.8 * res["voltage_drop"]["summary"]["total_limit_pct"])

    def test_material_desconocido(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(material="Unobtainium"))
        self.assertTrue(any("Unobtainium" in w for w in res["warnings"]))
        feeder = res["voltage_drop"]["feeder"]
        self.assertEqual(feeder["material"], "Cu")
        self.assertGreater(feeder["section_mm2"], 0.0)

    def test_aluminio(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(material="Al"))
        self.assertEqual(res["voltage_drop"]["feeder"]["material"], "Al")
        self.assertEqual(res["grounding"]["material"], "Al")


class TestPropiedades(unittest.TestCase):
    def test_suma_de_ambientes(self):
        res = ejecutar_calculo(*_casa())
        self.assertEqual(sum(c["total_va"] for c in res["loads_by_room"]), res["totals"]["total_connected_va"])

    def test_idempotente(self):
        a = ejecutar_calculo(*_casa())
        b = ejecutar_calculo(*_casa())
        self.assertEqual(a, b)

    def test_limites_de_breaker(self):
        res = ejecutar_calculo(*_casa())
        for c in res["proposed_circuits"]:
            if not c["flagged"]:
                self.assertGreaterEqual(c["suggested_breaker"], c["current_a"])
                self.assertLessEqual(c["suggested_breaker"], c["conductor_ampacity_a"])

    def test_topes_por_circuito(self):
        ambientes = [Ambiente("Salón", 120.0), Ambiente("Cocina", 20.0)]
        consumos = [Consumo("Horno", "Cocina", 4000.0), Consumo("Aire", "Salón", 2500.0)]
        res = ejecutar_calculo(ambientes, consumos)
        topes = {"lighting": 1500.0, "outlet": 1800.0}
        for c in res["proposed_circuits"]:
            self.assertLessEqual(c["assigned_va"], topes[c["type"]] + 1e-6)
        ids = [c["id"] for c in res["proposed_circuits"]]
        self.assertEqual(ids, [f"C{i:03d}" for i in range(1, len(ids) + 1)])


class TestFallasDeDominio(unittest.TestCase):
    def test_tension_cero_no_lanza(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(voltage_v=0.0))
        vd = res["voltage_drop"]
        self.assertTrue(all(c["status"] == ERROR for c in vd["circuits"]))
        self.assertEqual(vd["feeder"]["status"], ERROR)
        self.assertEqual(vd["summary"]["overall_status"], ERROR)
        self.assertTrue(all(c["suggested_breaker"] is None for c in res["proposed_circuits"]))
        self.assertEqual(res["grounding"]["status"], ERROR)

    def test_tension_negativa_lanza(self):
        with self.assertRaises(ErrorValidacionEntrada):
            ejecutar_calculo(*_casa(), OpcionesCalculo(voltage_v=-1.0))

    def test_referencia_colgante(self):
        with self.assertRaises(DanglingReferenceError):
            ejecutar_calculo([Ambiente("Sala", 10.0)], [Consumo("TV", "Estudio", 100.0)])

    def test_puesta_tierra_fuera_de_tabla(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(main_breaker_a=6000))
        self.assertEqual(res["grounding"]["status"], ERROR)
        self.assertIsNone(res["grounding"]["egc_mm2"])
        self.assertEqual(res["voltage_drop"]["summary"]["overall_status"], ERROR)
        self.assertTrue(any("puesta a tierra" in w for w in res["warnings"]))

    def test_sin_puesta_tierra(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(requiere_puesta_tierra=False, main_breaker_a=6000))
        self.assertIsNone(res["grounding"])

    def test_proveedor_vacio_usa_respaldos(self):
        res = ejecutar_calculo(*_casa(), proveedor=ProveedorTabla([]))
        self.assertTrue(res["warnings"])
        self.assertTrue(all("respaldo" in w for w in res["warnings"]))
        self.assertAlmostEqual(res["loads_by_room"][0]["lighting_va"], 597.55, places=6)


class TestAlcanceNormativo(unittest.TestCase):
    def test_rule_set_cambia_tension(self):
        base = ejecutar_calculo(*_casa())
        com = ejecutar_calculo(*_casa(), OpcionesCalculo(rule_set_id="comercial-240"))
        self.assertAlmostEqual(com["totals"]["total_current_a"] * 2, base["totals"]["total_current_a"])

    def test_demanda_escalonada(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(demanda_escalonada=True))
        self.assertEqual(res["totals"]["demand_method"], "tiered")
        self.assertLessEqual(res["totals"]["estimated_demand_va"], res["totals"]["total_connected_va"])


class TestPayload(unittest.TestCase):
    def test_equivalente_a_objetos(self):
        payload = {
            "rooms": [{"room_name": "Living Room", "area_m2": 18.5}],
            "items": [{"item_name": "TV", "room_name": "living room", "watts": 120}],
            "options": {"voltage_v": 120, "single_phase": True, "installation_method": "conduit"},
        }
        res = calcular_desde_payload(payload)
        obj = ejecutar_calculo(
            [Ambiente("Living Room", 18.5)],
            [Consumo("TV", "living room", 120.0)],
            OpcionesCalculo(voltage_v=120.0),
        )
        self.assertEqual(res, obj)

    def test_payload_invalido(self):
        for payload in (
            [],
            {"rooms": "sala"},
            {"rooms": [{"room_name": "Sala"}]},
            {"rooms": [{"room_name": "Sala", "area_m2": "grande"}]},
            {"rooms": [{"room_name": "Sala", "area_m2": 10}], "options": {"voltage_v": "alto"}},
        ):
            with self.subTest(payload=payload):
                with self.assertRaises(ErrorValidacionEntrada):
                    calcular_desde_payload(payload)


class TestTablero(unittest.TestCase):
    def test_monofasico_reparte_en_a_y_b(self):
        res = ejecutar_calculo(*_casa())
        circuitos = res["proposed_circuits"]
        panel = res["panel"]
        self.assertEqual(sorted(panel), ["phase_a", "phase_b", "phase_c"])
        self.assertTrue(all(c["phase"] in ("A", "B") for c in circuitos))
        self.assertEqual(panel["phase_c"], {"total_va": 0.0, "circuits": 0})
        self.assertAlmostEqual(
            sum(f["total_va"] for f in panel.values()), sum(c["assigned_va"] for c in circuitos), places=6,
        )
        self.assertEqual(sum(f["circuits"] for f in panel.values()), len(circuitos))

    def test_trifasico_y_utilizacion(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(single_phase=False))
        topes = {"lighting": 1500.0, "outlet": 1800.0}
        for c in res["proposed_circuits"]:
            self.assertIn(c["phase"], ("A", "B", "C"))
            self.assertAlmostEqual(c["utilization_pct"], 100.0 * c["assigned_va"] / topes[c["type"]])
            self.assertLessEqual(c["utilization_pct"], 100.0 + 1e-6)


class TestAlimentadorReportado(unittest.TestCase):
    def test_resistencia_a_temperatura_de_operacion(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(temp_ambiente_c=30.0))
        feeder = res["voltage_drop"]["feeder"]
        usada = 1000.0 * resistencia_por_metro("Cu", feeder["section_mm2"], 30.0)
        self.assertAlmostEqual(feeder["resistance_ohm_km"], usada)
        self.assertGreater(feeder["resistance_ohm_km"], 0.0)
        self.assertIn("table_resistance_ohm_km", feeder)

    def test_tension_cero_sin_conteo_fuera_de_limite(self):
        res = ejecutar_calculo(*_casa(), OpcionesCalculo(voltage_v=0.0))
        summary = res["voltage_drop"]["summary"]
        self.assertEqual(summary["out_of_limit_count"], 0)
        self.assertEqual(summary["overall_status"], ERROR)


class TestTemperaturaAmbiente(unittest.TestCase):
    def test_temperatura_no_fisica_es_error_de_entrada(self):
        for t in (-300.0, float("nan")):
            with self.subTest(t=t):
                with self.assertRaises(ErrorValidacionEntrada):
                    ejecutar_calculo(*_sala(), OpcionesCalculo(temp_ambiente_c=t))

    def test_temperatura_nan_desde_payload(self):
        payload = {
            "rooms": [{"room_name": "Sala", "area_m2": 20}],
            "items": [{"item_name": "TV", "room_name": "Sala", "watts": 1000}],
            "options": {"ambient_temp_c": "nan"},
        }
        with self.assertRaises(ErrorValidacionEntrada):
            calcular_desde_payload(payload)

    def test_temperatura_del_proveedor_se_valida(self):
        prov = ProveedorTabla([ParametroNormativo("temperatura_ambiente_c", -300.0)])
        with self.assertRaises(ErrorValidacionEntrada):
            ejecutar_calculo(*_casa(), proveedor=prov)

    def test_longitud_critica_positiva(self):
        res = ejecutar_calculo(*_sala(), OpcionesCalculo(temp_ambiente_c=-40.0))
        vd = res["voltage_drop"]
        self.assertGreater(vd["feeder"]["critical_length_m"], 0.0)
        self.assertTrue(all(c["critical_length_m"] > 0.0 for c in vd["circuits"]))

    def test_fecha_de_vigencia_mal_formada(self):
        with self.assertRaises(ErrorValidacionEntrada):
            ejecutar_calculo(*_casa(), OpcionesCalculo(effective_date="2024-13-45"))


if __name__ == "__main__":
    unittest.main()
