"""
Шкалы utility-классов: CSS-значение -> имя шага шкалы.

Таблицы неизменяемы и общие для процесса.
"""

from types import MappingProxyType

SPACING_SCALE = MappingProxyType(
	{
		'0px': '0',
		'1px': 'px',
		'2px': '0.5',
		'4px': '1',
		'6px': '1.5',
		'8px': '2',
		'10px': '2.5',
		'12px': '3',
		'14px': '3.5',
		'16px': '4',
		'20px': '5',
		'24px': '6',
		'28px': '7',
		'32px': '8',
		'36px': '9',
		'40px': '10',
		'44px': '11',
		'48px': '12',
		'56px': '14',
		'64px': '16',
		'80px': '20',
		'96px': '24',
		'112px': '28',
		'128px': '32',
		'144px': '36',
		'160px': '40',
		'176px': '44',
		'192px': '48',
		'208px': '52',
		'224px': '56',
		'240px': '60',
		'256px': '64',
		'288px': '72',
		'320px': '80',
		'384px': '96',
		'auto': 'auto',
	}
)

FONT_SIZE_MAP = MappingProxyType(
	{
		'12px': 'xs',
		'14px': 'sm',
		'16px': 'base',
		'18px': 'lg',
		'20px': 'xl',
		'24px': '2xl',
		'30px': '3xl',
		'36px': '4xl',
		'48px': '5xl',
		'60px': '6xl',
		'72px': '7xl',
		'96px': '8xl',
		'128px': '9xl',
	}
)

FONT_WEIGHT_MAP = MappingProxyType(
	{
		'100': 'thin',
		'200': 'extralight',
		'300': 'light',
		'400': 'normal',
		'500': 'medium',
		'600': 'semibold',
		'700': 'bold',
		'800': 'extrabold',
		'900': 'black',
	}
)

# 'DEFAULT' означает класс без суффикса: rounded
BORDER_RADIUS_MAP = MappingProxyType(
	{
		'0px': 'none',
		'2px': 'sm',
		'4px': 'DEFAULT',
		'6px': 'md',
		'8px': 'lg',
		'12px': 'xl',
		'16px': '2xl',
		'24px': '3xl',
		'9999px': 'full',
		'50%': 'full',
	}
)

LINE_HEIGHT_MAP = MappingProxyType(
	{
		'1': 'none',
		'1.25': 'tight',
		'1.375': 'snug',
		'1.5': 'normal',
		'1.625': 'relaxed',
		'2': 'loose',
		'12px': '3',
		'16px': '4',
		'20px': '5',
		'24px': '6',
		'28px': '7',
		'32px': '8',
		'36px': '9',
		'40px': '10',
	}
)

OPACITY_MAP = MappingProxyType(
	{
		'0': '0',
		'0.05': '5',
		'0.1': '10',
		'0.15': '15',
		'0.2': '20',
		'0.25': '25',
		'0.3': '30',
		'0.35': '35',
		'0.4': '40',
		'0.45': '45',
		'0.5': '50',
		'0.55': '55',
		'0.6': '60',
		'0.65': '65',
		'0.7': '70',
		'0.75': '75',
		'0.8': '80',
		'0.85': '85',
		'0.9': '90',
		'0.95': '95',
		'1': '100',
	}
)

WIDTH_MAP = MappingProxyType(
	{
		'100%': 'full',
		'100vw': 'screen',
		'50%': '1/2',
		'25%': '1/4',
		'75%': '3/4',
		'33.3333%': '1/3',
		'66.6667%': '2/3',
		'fit-content': 'fit',
		'min-content': 'min',
		'max-content': 'max',
		'auto': 'auto',
	}
)

HEIGHT_MAP = MappingProxyType(
	{
		'100%': 'full',
		'100vh': 'screen',
		'100dvh': 'dvh',
		'fit-content': 'fit',
		'min-content': 'min',
		'max-content': 'max',
		'auto': 'auto',
	}
)

MAX_WIDTH_MAP = MappingProxyType(
	{
		'none': 'none',
		'320px': 'xs',
		'384px': 'sm',
		'448px': 'md',
		'512px': 'lg',
		'576px': 'xl',
		'672px': '2xl',
		'768px': '3xl',
		'896px': '4xl',
		'1024px': '5xl',
		'1152px': '6xl',
		'1280px': '7xl',
		'100%': 'full',
		'65ch': 'prose',
		'fit-content': 'fit',
		'min-content': 'min',
		'max-content': 'max',
	}
)

Z_INDEX_SCALE = frozenset({'0', '10', '20', '30', '40', '50'})

# Ключи: вычисленные значения, как их отдаёт браузер (после схлопывания пробелов)
COLOR_PALETTE = MappingProxyType(
	{
		'rgba(0, 0, 0, 0)': 'transparent',
		'rgb(0, 0, 0)': 'black',
		'rgb(255, 255, 255)': 'white',
		# gray
		'rgb(249, 250, 251)': 'gray-50',
		'rgb(243, 244, 246)': 'gray-100',
		'rgb(229, 231, 235)': 'gray-200',
		'rgb(209, 213, 219)': 'gray-300',
		'rgb(156, 163, 175)': 'gray-400',
		'rgb(107, 114, 128)': 'gray-500',
		'rgb(75, 85, 99)': 'gray-600',
		'rgb(55, 65, 81)': 'gray-700',
		'rgb(31, 41, 55)': 'gray-800',
		'rgb(17, 24, 39)': 'gray-900',
		'rgb(3, 7, 18)': 'gray-950',
		# slate
		'rgb(248, 250, 252)': 'slate-50',
		'rgb(241, 245, 249)': 'slate-100',
		'rgb(226, 232, 240)': 'slate-200',
		'rgb(203, 213, 225)': 'slate-300',
		'rgb(148, 163, 184)': 'slate-400',
		'rgb(100, 116, 139)': 'slate-500',
		'rgb(71, 85, 105)': 'slate-600',
		'rgb(51, 65, 85)': 'slate-700',
		'rgb(30, 41, 59)': 'slate-800',
		'rgb(15, 23, 42)': 'slate-900',
		# red
		'rgb(254, 242, 242)': 'red-50',
		'rgb(254, 226, 226)': 'red-100',
		'rgb(239, 68, 68)': 'red-500',
		'rgb(220, 38, 38)': 'red-600',
		'rgb(185, 28, 28)': 'red-700',
		# yellow
		'rgb(250, 204, 21)': 'yellow-400',
		'rgb(234, 179, 8)': 'yellow-500',
		# green
		'rgb(240, 253, 244)': 'green-50',
		'rgb(220, 252, 231)': 'green-100',
		'rgb(34, 197, 94)': 'green-500',
		'rgb(22, 163, 74)': 'green-600',
		'rgb(21, 128, 61)': 'green-700',
		# blue
		'rgb(239, 246, 255)': 'blue-50',
		'rgb(219, 234, 254)': 'blue-100',
		'rgb(59, 130, 246)': 'blue-500',
		'rgb(37, 99, 235)': 'blue-600',
		'rgb(29, 78, 216)': 'blue-700',
		# indigo
		'rgb(99, 102, 241)': 'indigo-500',
		'rgb(79, 70, 229)': 'indigo-600',
	}
)
