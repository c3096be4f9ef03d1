"""
BrewCalc Brew Sheet Tests
"""

from brewcalc import Steps, print_process


class TestPrintProcess:
    def test_sections(self, process):
        sheet = print_process(process)
        assert sheet.startswith("Marzen\n")
        for section in ("ACQUIRE", "WATER", "MASH", "BOIL", "CHILL", "PITCH", "FERMENT", "PACKAGE"):
            assert f"\n{section}\n" in sheet
        assert "Style: Märzen" in sheet
        assert "Gypsum" in sheet
        assert "Lactic Acid" in sheet
        assert "WARNINGS" not in sheet

    def test_lines_wrapped(self, process):
        sheet = print_process(process, width=50)
        assert all(len(line) <= 50 for line in sheet.splitlines())

    def test_custom_steps_appended(self, process):
        sheet = print_process(process, Steps(boil=["Skim the hot break"], package=["Label the keg"]))
        boil = sheet.split("\nBOIL\n")[1].split("\n\n")[0]
        assert boil.splitlines()[-1].endswith("Skim the hot break")
        assert "Label the keg" in sheet

    def test_warnings_listed(self, make_process):
        sheet = print_process(make_process(equipment={"fermenters_l": [4.0]}))
        assert "WARNINGS" in sheet
        assert "ERROR: Fermenters are too small" in sheet

    def test_bottled_and_diluted(self, make_process):
        process = make_process(
            7.0,
            equipment={"packaging": {"kind": "bottle", "size_l": 0.5}, "ice_bath": True},
            recipe={"max_partial_boil_dilution": 0.2},
        )
        sheet = print_process(process)
        assert "Prime with" in sheet
        assert "Top up with" in sheet
        assert "ice bath" in sheet

    def test_lagering_steps(self, make_process):
        sheet = print_process(make_process(equipment={"lagerers_l": [5.0]}))
        ferment = sheet.split("\nFERMENT\n")[1].split("\n\n")[0]
        assert "5 L lagering vessel" in ferment
        assert "hold for 49 days" in ferment
