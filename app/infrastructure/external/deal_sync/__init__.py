"""
Pipeline de sincronización one-way: HubSpot (deals) -> Notion (base de proyectos).

Este paquete está diseñado para ejecutarse como job (cron / task scheduler) o
disparado desde el endpoint de sync; cada corrida es un full scan sin estado.

Objetivos de diseño:
- Idempotencia: se puede ejecutar N veces sin duplicar filas en Notion.
- Matching por referencia: cada fila guarda la URL del deal en HubSpot.
- Esquema alineado: las columnas de Notion siguen las propiedades del deal.
- Concurrencia acotada: las escrituras van en lotes de tamaño fijo.
"""
