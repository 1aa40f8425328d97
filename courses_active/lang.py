from flask import current_app, has_app_context

STRINGS = {
    'en': {
        'pluginname': 'Active courses',
        'noactivecourses': 'No active courses',
    },
    'es': {
        'pluginname': 'Cursos activos',
        'noactivecourses': 'No hay cursos activos',
    },
    'fr': {
        'pluginname': 'Cours actifs',
        'noactivecourses': 'Aucun cours actif',
    },
}

FALLBACK_LANG = 'en'

def get_string(identifier, lang=None):
    """Localized string for identifier, falling back to English"""
    if lang is None:
        lang = current_app.config.get('DEFAULT_LANG', FALLBACK_LANG) if has_app_context() else FALLBACK_LANG

    for candidate in (lang, FALLBACK_LANG):
        strings = STRINGS.get(candidate, {})
        if identifier in strings:
            return strings[identifier]
    return f'[[{identifier}]]'
