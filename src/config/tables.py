"""Default table registry: table name -> primary key column."""

# Equipment maintenance schema. Join tables have composite keys; the first
# key column is used for ordering and row lookup.
#
# Known limitation of the join tables (equipment_schedules, personnel_skills,
# schedules_personnel, schedules_skills): their registered key is an integer
# foreign key column, so it is treated as auto-generated. The add form omits
# it and inserts fail on the NOT NULL constraint. Delete by that key removes
# every link row that shares it, not a single row. Browse and edit work.
DEFAULT_CRUD_TABLES: dict[str, str] = {
    "equipment": "equipment_id",
    "personnel": "id_persona",
    "schedules": "horarios_id",
    "equipment_types": "codigo_tipo_equipo",
    "skills": "codigo_habilidad",
    "equipment_schedules": "equipment_id",
    "personnel_skills": "id_persona",
    "schedules_personnel": "horarios_id",
    "schedules_skills": "horarios_id",
}
