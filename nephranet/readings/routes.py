"""
Readings Routes

Upload, browse and map community water quality readings.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, jsonify, current_app
from flask_login import login_required, current_user

from nephranet.errors import StoreError, GeocodingError, SubmissionError
from nephranet.readings import readings_bp
from nephranet.readings.services import (
    submit_reading, annotate, filter_readings, sort_readings, compute_statistics, map_points,
    SORT_OPTIONS, QUALITY_OPTIONS
)
from nephranet.services.geocoding import get_geocoder
from nephranet.services.store import get_store
from nephranet.services.wqi import wqi_legend

logger = logging.getLogger(__name__)


@readings_bp.route('/')
def index():
    """Landing page with the WQI legend"""
    return render_template('readings/home.html', legend=wqi_legend())


@readings_bp.route('/upload', methods=['GET', 'POST'])
@login_required
def upload():
    """Submit a new pH/turbidity measurement"""
    form = {'location': '', 'ph': '', 'turbidity': ''}

    if request.method == 'POST':
        form = {key: request.form.get(key, '').strip() for key in form}
        try:
            submit_reading(get_store(), get_geocoder(), current_user,
                           form['location'], form['ph'], form['turbidity'])
        except (SubmissionError, GeocodingError, StoreError) as e:
            logger.info('Upload rejected for user %s: %s', current_user.id, e.message)
            flash(e.message, 'danger')
            return render_template('readings/upload.html', form=form), 400

        flash('Water quality data uploaded successfully!', 'success')
        return redirect(url_for('readings.upload'))

    return render_template('readings/upload.html', form=form)


@readings_bp.route('/community')
def community():
    """Searchable list of every submitted reading"""
    search = request.args.get('q', '').strip()
    sort_by = request.args.get('sort', 'date')
    quality = request.args.get('quality', 'all')
    if sort_by not in SORT_OPTIONS:
        sort_by = 'date'
    if quality not in QUALITY_OPTIONS:
        quality = 'all'

    try:
        items = annotate(get_store().list_readings())
    except StoreError as e:
        return render_template('readings/community.html',
                               error=e.message,
                               items=[],
                               stats=compute_statistics([]),
                               search=search,
                               sort_by=sort_by,
                               quality=quality,
                               sort_options=SORT_OPTIONS,
                               quality_options=QUALITY_OPTIONS), 503

    stats = compute_statistics(items)
    items = sort_readings(filter_readings(items, search, quality), sort_by)

    return render_template('readings/community.html',
                           error=None,
                           items=items,
                           stats=stats,
                           search=search,
                           sort_by=sort_by,
                           quality=quality,
                           sort_options=SORT_OPTIONS,
                           quality_options=QUALITY_OPTIONS)


@readings_bp.route('/map')
def map_view():
    """Map of readings colored by WQI band"""
    cfg = current_app.config
    try:
        points = map_points(get_store().list_readings())
        error = None
    except StoreError as e:
        points = []
        error = 'Failed to fetch locations'
        logger.warning('Map data unavailable: %s', e.message)

    return render_template('readings/map.html',
                           points=points,
                           error=error,
                           center=list(cfg['MAP_CENTER']),
                           zoom=cfg['MAP_ZOOM'],
                           tile_url=cfg['MAP_TILE_URL'],
                           tile_attribution=cfg['MAP_TILE_ATTRIBUTION']), 503 if error else 200


@readings_bp.route('/api/readings')
def api_readings():
    """Return JSON of all readings with their WQI"""
    try:
        records = get_store().list_readings()
    except StoreError as e:
        return jsonify({'error': e.message}), 503

    data = []
    for item in annotate(records):
        entry = item['reading'].to_dict()
        entry.update({'wqi': item['wqi'], 'status': item['status']})
        data.append(entry)

    return jsonify(data)
