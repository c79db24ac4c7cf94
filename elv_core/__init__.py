"""
elv_core: расчётное ядро калькуляторов СНТ (слаботочных систем).

- классификация лазеров, MPE, NOHD, оптическая плотность очков (IEC 60825-1:2014, EN 207)
- бюджет сигнала ТВ-распределительной сети (dBµV)
- бюджет мощности оптической линии

UI и экспорт в ядре отсутствуют: функции чистые, результаты содержат журнал шагов (steps).
"""

from .classification import WavelengthData, classify_single, classify_wavelengths
from .eyewear import calculate_eyewear
from .fiber_budget import FiberLinkInputs, apply_transceiver, calculate_fiber_budget
from .mpe import comprehensive_mpe
from .nohd import calculate_nohd
from .tv_signal import SignalChain, calculate_signal

__all__ = [
    "FiberLinkInputs",
    "SignalChain",
    "WavelengthData",
    "apply_transceiver",
    "calculate_eyewear",
    "calculate_fiber_budget",
    "calculate_nohd",
    "calculate_signal",
    "classify_single",
    "classify_wavelengths",
    "comprehensive_mpe",
]
