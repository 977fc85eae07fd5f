"""fz — narzędzie CLI silnika wnioskowania rozmytego."""

__version__ = "0.1.0"
