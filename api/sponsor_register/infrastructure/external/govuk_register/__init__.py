"""
Fuente del registro de sponsors publicado por el Home Office en gov.uk.

- Descubre el enlace al CSV vigente en la pagina de la publicacion
- Descarga el CSV completo (sin paginacion)
- Lo convierte en FeedRecord planos

Las funciones de parseo no hacen I/O para poder testearlas facilmente.
"""
