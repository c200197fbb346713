import tempfile
import unittest
from pathlib import Path

from nucleo.configuracion import cargar_opciones_yaml, construir_opciones_efectivas, opciones_desde_dict
from nucleo.errores import ErrorValidacionEntrada
from nucleo.mapeo import consumos_desde_payload, desde_payload
from nucleo.modelo import OpcionesCalculo


class TestOpciones(unittest.TestCase):
    def test_claves_externas(self):
        op = opciones_desde_dict({
            "voltage_v": "240",
            "single_phase": "false",
            "installation_method": "raceway",
            "ambient_temp_c": 40,
            "tiered_demand": 1,
            "grounding_required": "no",
            "effective_date": "2024-06-01",
        })
        self.assertEqual(op.voltage_v, 240.0)
        self.assertFalse(op.single_phase)
        self.assertEqual(op.fases, 3)
        self.assertEqual(op.metodo_instalacion, "raceway")
        self.assertEqual(op.temp_ambiente_c, 40.0)
        self.assertTrue(op.demanda_escalonada)
        self.assertFalse(op.requiere_puesta_tierra)
        self.assertEqual(op.effective_date, "2024-06-01")

    def test_vacio_y_nulos_usan_defaults(self):
        self.assertEqual(opciones_desde_dict(None), OpcionesCalculo())
        self.assertEqual(opciones_desde_dict({"material": None, "single_phase": None}), OpcionesCalculo())

    def test_clave_desconocida_se_ignora(self):
        with self.assertLogs("nucleo.configuracion", level="WARNING"):
            op = opciones_desde_dict({"color": "azul"})
        self.assertEqual(op, OpcionesCalculo())

    def test_tipos_invalidos(self):
        for d in ({"voltage_v": "alto"}, {"single_phase": "quizas"}, {"power_factor": True}):
            with self.subTest(d=d):
                with self.assertRaises(ErrorValidacionEntrada):
                    opciones_desde_dict(d)

    def test_override_superficial(self):
        base = OpcionesCalculo(voltage_v=120.0, material="Al")
        ef = construir_opciones_efectivas(base, {"voltage_v": 240})
        self.assertEqual(ef.voltage_v, 240.0)
        self.assertEqual(ef.material, "Al")
        self.assertIs(construir_opciones_efectivas(base, None), base)

    def test_yaml(self):
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "proyecto.yaml"
            p.write_text("options:\n  voltage_v: 208\n  single_phase: false\n  material: aluminio\n", encoding="utf-8")
            op = cargar_opciones_yaml(p)
        self.assertEqual(op.voltage_v, 208.0)
        self.assertEqual(op.fases, 3)
        self.assertEqual(op.material, "aluminio")

    def test_yaml_inexistente(self):
        with self.assertRaises(FileNotFoundError):
            cargar_opciones_yaml("/no/existe/proyecto.yaml")


class TestMapeo(unittest.TestCase):
    def test_factor_uso_opcional(self):
        (a, b) = consumos_desde_payload([
            {"item_name": "TV", "room_name": "Sala", "watts": 100},
            {"item_name": "Horno", "room_name": "Cocina", "watts": "1500", "usage_factor": 0.5},
        ])
        self.assertEqual(a.factor_uso, 1.0)
        self.assertEqual(b.potencia_w, 1500.0)
        self.assertEqual(b.factor_uso, 0.5)

    def test_desde_payload(self):
        ambientes, consumos, opciones = desde_payload({
            "rooms": [{"room_name": "Sala", "area_m2": 10}],
            "options": {"rule_set_id": "RIE-2024"},
        })
        self.assertEqual(len(ambientes), 1)
        self.assertEqual(consumos, [])
        self.assertEqual(opciones.rule_set_id, "RIE-2024")

    def test_item_sin_watts(self):
        with self.assertRaises(ErrorValidacionEntrada):
            consumos_desde_payload([{"item_name": "TV", "room_name": "Sala"}])


if __name__ == "__main__":
    unittest.main()
