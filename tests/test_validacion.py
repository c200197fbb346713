import unittest
from datetime import date

from nucleo.errores import DanglingReferenceError, DuplicateRoomError, ErrorValidacionEntrada
from nucleo.modelo import Ambiente, Consumo, OpcionesCalculo
from nucleo.validacion import clave_ambiente, normalizar_entradas, validar_opciones, validar_temperatura


class TestNormalizarEntradas(unittest.TestCase):
    def test_nombres_sin_distinguir_mayusculas_y_trim(self):
        ent = normalizar_entradas(
            [Ambiente("  Living Room ", 18.5), Ambiente("Cocina", 10.0)],
            [Consumo("TV", "living room", 120.0), Consumo("Nevera", " COCINA", 300.0)],
        )
        self.assertEqual(ent.claves(), ["living room", "cocina"])
        self.assertEqual(ent.nombre("living room"), "Living Room")
        self.assertEqual(len(ent.consumos["living room"]), 1)
        self.assertEqual(ent.consumos["cocina"][0].nombre, "Nevera")

    def test_ambiente_sin_consumos_queda_vacio(self):
        ent = normalizar_entradas([Ambiente("Baño", 4.0)], [])
        self.assertEqual(ent.consumos["baño"], ())

    def test_duplicado_case_insensitive(self):
        with self.assertRaises(DuplicateRoomError) as cm:
            normalizar_entradas([Ambiente("Sala", 10.0), Ambiente("SALA ", 12.0)], [])
        self.assertIsInstance(cm.exception, ValueError)
        self.assertEqual(cm.exception.previo, "Sala")

    def test_referencia_colgante(self):
        with self.assertRaises(DanglingReferenceError) as cm:
            normalizar_entradas([Ambiente("Sala", 10.0)], [Consumo("Horno", "Cocina", 1500.0)])
        self.assertEqual(cm.exception.ambiente, "Cocina")

    def test_lista_vacia(self):
        with self.assertRaises(ErrorValidacionEntrada):
            normalizar_entradas([], [])

    def test_area_no_positiva(self):
        for area in (0.0, -3.0, float("nan")):
            with self.subTest(area=area):
                with self.assertRaises(ErrorValidacionEntrada):
                    normalizar_entradas([Ambiente("Sala", area)], [])

    def test_consumo_invalido(self):
        casos = [
            Consumo("TV", "Sala", -1.0),
            Consumo("TV", "Sala", 100.0, factor_uso=1.5),
            Consumo("TV", "Sala", 100.0, factor_uso=-0.1),
            Consumo("  ", "Sala", 100.0),
        ]
        for c in casos:
            with self.subTest(consumo=c):
                with self.assertRaises(ErrorValidacionEntrada):
                    normalizar_entradas([Ambiente("Sala", 10.0)], [c])

    def test_nombre_en_blanco(self):
        with self.assertRaises(ErrorValidacionEntrada):
            normalizar_entradas([Ambiente("   ", 10.0)], [])

    def test_clave_ambiente(self):
        self.assertEqual(clave_ambiente("  Dormitorio Principal "), "dormitorio principal")


class TestValidarOpciones(unittest.TestCase):
    def test_tension_negativa_es_error_de_entrada(self):
        with self.assertRaises(ErrorValidacionEntrada):
            validar_opciones(OpcionesCalculo(voltage_v=-120.0))

    def test_tension_cero_no_se_rechaza(self):
        validar_opciones(OpcionesCalculo(voltage_v=0.0))

    def test_longitudes_y_factor_potencia(self):
        for op in (
            OpcionesCalculo(longitud_ramal_m=0.0),
            OpcionesCalculo(longitud_alimentador_m=-5.0),
            OpcionesCalculo(main_breaker_a=0.0),
            OpcionesCalculo(factor_potencia=1.2),
            OpcionesCalculo(factor_potencia=0.0),
        ):
            with self.subTest(opciones=op):
                with self.assertRaises(ErrorValidacionEntrada):
                    validar_opciones(op)

    def test_fases(self):
        self.assertEqual(OpcionesCalculo().fases, 1)
        self.assertEqual(OpcionesCalculo(single_phase=False).fases, 3)


class TestTemperaturaYFecha(unittest.TestCase):
    def test_temperatura_fuera_de_rango(self):
        for t in (-300.0, -41.0, 95.0, float("nan"), float("inf")):
            with self.subTest(t=t):
                with self.assertRaises(ErrorValidacionEntrada):
                    validar_opciones(OpcionesCalculo(temp_ambiente_c=t))

    def test_temperatura_en_rango(self):
        for t in (-40.0, 0.0, 30.0, 90.0):
            with self.subTest(t=t):
                validar_opciones(OpcionesCalculo(temp_ambiente_c=t))
        self.assertEqual(validar_temperatura(45), 45.0)

    def test_origen_en_el_mensaje(self):
        with self.assertRaises(ErrorValidacionEntrada) as cm:
            validar_temperatura(120.0, "temperatura_ambiente_c")
        self.assertIn("temperatura_ambiente_c", str(cm.exception))

    def test_fecha_de_vigencia_invalida(self):
        with self.assertRaises(ErrorValidacionEntrada):
            validar_opciones(OpcionesCalculo(effective_date="31/12/2024"))

    def test_fecha_de_vigencia_valida(self):
        validar_opciones(OpcionesCalculo(effective_date="2024-06-30"))
        validar_opciones(OpcionesCalculo(effective_date=date(2024, 6, 30)))


if __name__ == "__main__":
    unittest.main()
