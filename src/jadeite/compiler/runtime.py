"""PHP runtime helpers called by compiled templates.

Compiled attribute code calls these functions through the configured
runtime namespace. In stand-alone mode their source is prepended to the
output so the template needs no external library.
"""

from __future__ import annotations

from string import Template

RUNTIME_FUNCTIONS = (
    "build_value",
    "build_class_value",
    "build_style_value",
    "build_data_value",
    "is_null_or_false",
    "is_array_null_or_false",
    "flatten",
)

# PHP source is full of ``$``, so the namespace placeholder uses ``@``
_RUNTIME_SOURCE = """\
<?php
namespace @namespace {

    if (!function_exists(__NAMESPACE__.'\\\\flatten')) {
        function flatten($value, $separator = ' ', $pairSeparator = '=')
        {
            if (is_object($value))
                $value = (array)$value;
            if (!is_array($value))
                return (string)$value;

            $items = [];
            foreach ($value as $key => $item) {
                if (is_null_or_false($item))
                    continue;
                if (is_object($item) || is_array($item))
                    $item = flatten($item, $separator, $pairSeparator);
                $items[] = is_string($key) ? $key.$pairSeparator.$item : $item;
            }
            return implode($separator, $items);
        }
    }

    if (!function_exists(__NAMESPACE__.'\\\\is_null_or_false')) {
        function is_null_or_false($value)
        {
            return $value === null || $value === false;
        }
    }

    if (!function_exists(__NAMESPACE__.'\\\\is_array_null_or_false')) {
        function is_array_null_or_false(array $values)
        {
            return count(array_filter($values, __NAMESPACE__.'\\\\is_null_or_false')) === count($values);
        }
    }

    if (!function_exists(__NAMESPACE__.'\\\\build_value')) {
        function build_value($value, $quoteStyle, $escaped = true)
        {
            $value = flatten($value, '');
            return $quoteStyle.($escaped ? htmlentities($value, \\ENT_QUOTES) : $value).$quoteStyle;
        }
    }

    if (!function_exists(__NAMESPACE__.'\\\\build_class_value')) {
        function build_class_value($value, $quoteStyle, $escaped = true)
        {
            $value = flatten($value, ' ');
            return $quoteStyle.($escaped ? htmlentities($value, \\ENT_QUOTES) : $value).$quoteStyle;
        }
    }

    if (!function_exists(__NAMESPACE__.'\\\\build_style_value')) {
        function build_style_value($value, $quoteStyle, $escaped = true)
        {
            $value = flatten($value, '; ', ': ');
            return $quoteStyle.($escaped ? htmlentities($value, \\ENT_QUOTES) : $value).$quoteStyle;
        }
    }

    if (!function_exists(__NAMESPACE__.'\\\\build_data_value')) {
        function build_data_value($value, $quoteStyle, $escaped = true)
        {
            if (is_object($value) || is_array($value))
                return $quoteStyle.htmlentities(json_encode($value), \\ENT_QUOTES).$quoteStyle;
            return $quoteStyle.($escaped ? htmlentities((string)$value, \\ENT_QUOTES) : (string)$value).$quoteStyle;
        }
    }
}
?>
"""


class _RuntimeTemplate(Template):
    delimiter = "@"


def render_runtime(namespace: str) -> str:
    """Return the PHP source of the runtime helpers inside ``namespace``.

    Args:
        namespace: PHP namespace, with or without leading backslash

    Returns:
        A complete ``<?php ... ?>`` section declaring the helper functions.
    """
    return _RuntimeTemplate(_RUNTIME_SOURCE).substitute(namespace=namespace.strip("\\"))
